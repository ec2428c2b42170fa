"""Order admission validation — pure checks over fetched product facts.

The checks run in a fixed order so the same cart always fails the same
way: cart shape, then shop, then currency, then payment. A cart that
spans two shops is therefore reported as a shop error even when its
currencies also differ or its stock would be short.
"""

from dataclasses import dataclass

from ordering.catalogue.port import ProductPricing
from ordering.exceptions import InvalidCartComposition, InvalidPaymentType, MissingPaymentProof
from ordering.order.order import PaymentType


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int


def validate_cart_shape(lines: list[CartLine]) -> None:
    if not lines:
        raise InvalidCartComposition("Cart is empty")
    for line in lines:
        if line.quantity is None or line.quantity <= 0:
            raise InvalidCartComposition(f"Quantity for product {line.product_id} must be greater than zero")


def validate_admission(
    lines: list[CartLine],
    products: dict[str, ProductPricing],
    payment_type: str,
    payslip_reference: str | None,
) -> tuple[str, str]:
    """Validate a cart against its product facts.

    Returns:
        The cart's single ``(shop_id, currency_id)``.
    """
    validate_cart_shape(lines)

    shop_ids = {products[line.product_id].shop_id for line in lines}
    if len(shop_ids) > 1:
        raise InvalidCartComposition("Cart contains items from more than one shop")

    currency_ids = {products[line.product_id].currency_id for line in lines}
    if len(currency_ids) > 1:
        raise InvalidCartComposition("Cart contains items with mixed currencies")

    if payment_type not in {pt.value for pt in PaymentType}:
        raise InvalidPaymentType(f"Invalid payment type: {payment_type}")

    if payment_type != PaymentType.CASH_ON_DELIVERY.value and not (payslip_reference or "").strip():
        raise MissingPaymentProof("Payslip is required for prepaid orders")

    return shop_ids.pop(), currency_ids.pop()
