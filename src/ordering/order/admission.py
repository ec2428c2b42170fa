"""Order admission — turns a submitted cart into a persisted PENDING order.

Admission is synchronous up to "stock reserved and order stored":

    1. Fetch product facts from the catalogue
    2. Validate the cart (shape, single shop, single currency, payment)
    3. Reserve stock for every line in one ledger transaction
    4. Price each line through the discount resolver
    5. Persist the order with ``PlaceOrder``; on failure, give the
       reserved stock back
    6. Hand notification and invoice work to the background queue

``PlaceOrder`` commits when ``current_domain.process`` returns, so the
release in step 5 also covers a failed commit and background work never
sees an uncommitted order. Background failures are only logged.
"""

import json
from dataclasses import dataclass

import structlog
from protean.utils.mixins import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.principal import Principal
from inventory.ledger import StockLine, get_ledger
from ordering.catalogue import get_catalogue
from ordering.domain import ordering
from ordering.exceptions import ProductNotFound
from ordering.order.order import Order
from ordering.order.tasks import submit_invoice_generation, submit_order_placed_notice
from ordering.order.validation import CartLine, validate_admission, validate_cart_shape
from ordering.pricing.resolver import DiscountResolver

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    currency_id = Identifier(required=True)
    currency_symbol = String(max_length=10)
    payment_type = String(required=True, max_length=50)
    payslip_reference = String(max_length=500)
    lines = Text(required=True)  # JSON: list of priced line dicts
    shipping_address = Text()  # JSON: address dict


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = json.loads(command.lines) if isinstance(command.lines, str) else command.lines
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        order = Order.place(
            buyer_id=command.buyer_id,
            shop_id=command.shop_id,
            currency_id=command.currency_id,
            currency_symbol=command.currency_symbol,
            payment_type=command.payment_type,
            payslip_reference=command.payslip_reference,
            shipping_address=shipping_address,
            lines=lines,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)


@dataclass(frozen=True)
class AdmissionResult:
    order_id: str
    is_already_reviewed: bool


class OrderAdmission:
    def __init__(self, catalogue=None, ledger=None, resolver=None) -> None:
        self.catalogue = catalogue or get_catalogue()
        self.ledger = ledger or get_ledger()
        self.resolver = resolver or DiscountResolver()

    def _fetch_products(self, lines: list[CartLine]):
        products = {}
        for line in lines:
            if line.product_id in products:
                continue
            product = self.catalogue.get_product_pricing(line.product_id)
            if product is None:
                raise ProductNotFound(line.product_id)
            products[line.product_id] = product
        return products

    def _price_lines(self, lines: list[CartLine], products, shop_id) -> list[dict]:
        priced_lines = []
        for line in lines:
            product = products[line.product_id]
            outcome = self.resolver.resolve(
                shop_id=shop_id,
                product_id=product.product_id,
                brand_id=product.brand_id,
                category_id=product.category_id,
                base_price=product.base_price,
            )
            priced_lines.append(
                {
                    "product_id": product.product_id,
                    "title": product.title,
                    "brand_name": product.brand_name,
                    "product_model": product.model,
                    "quantity": line.quantity,
                    "unit_price": outcome.discounted_price,
                    "base_price": product.base_price,
                    "discount_percent": outcome.discount_percent,
                    "discount_type": outcome.discount_type,
                    "discount_reason": outcome.discount_reason,
                }
            )
        return priced_lines

    def admit(
        self,
        principal: Principal,
        lines: list[CartLine],
        payment_type: str,
        payslip_reference: str | None = None,
        shipping_address: dict | None = None,
    ) -> AdmissionResult:
        validate_cart_shape(lines)
        products = self._fetch_products(lines)
        shop_id, currency_id = validate_admission(lines, products, payment_type, payslip_reference)
        is_already_reviewed = self.catalogue.is_shop_reviewed_by(shop_id, principal.user_id)

        reservation = self.ledger.reserve(StockLine(product_id=line.product_id, quantity=line.quantity) for line in lines)

        try:
            priced_lines = self._price_lines(lines, products, shop_id)
            order_id = current_domain.process(
                PlaceOrder(
                    buyer_id=principal.user_id,
                    shop_id=shop_id,
                    currency_id=currency_id,
                    currency_symbol=products[lines[0].product_id].currency_symbol,
                    payment_type=payment_type,
                    payslip_reference=payslip_reference,
                    lines=json.dumps(priced_lines),
                    shipping_address=json.dumps(shipping_address) if shipping_address else None,
                ),
                asynchronous=False,
            )
        except Exception:
            logger.error(
                "Order persistence failed, releasing reserved stock",
                reservation_id=reservation.reservation_id,
                buyer_id=principal.user_id,
            )
            self.ledger.release(reservation)
            raise

        logger.info(
            "Order admitted",
            order_id=order_id,
            buyer_id=principal.user_id,
            shop_id=shop_id,
        )

        submit_order_placed_notice(order_id)
        submit_invoice_generation(order_id)

        return AdmissionResult(order_id=order_id, is_already_reviewed=is_already_reviewed)
