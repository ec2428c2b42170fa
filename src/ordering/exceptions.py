"""Errors raised by order admission and the order lifecycle."""

from shared.errors import Conflict, MarketplaceError, NotFound, Unauthorized


class InvalidCartComposition(MarketplaceError):
    """Cart is empty, has a non-positive quantity, or spans shops or currencies."""


class InvalidPaymentType(MarketplaceError):
    pass


class MissingPaymentProof(MarketplaceError):
    """A prepaid order was submitted without a payslip reference."""


class InvalidStatus(MarketplaceError):
    pass


class InvalidStatusTransition(MarketplaceError):
    pass


class OrderNotFound(NotFound):
    def __init__(self, order_id: str) -> None:
        super().__init__("Order not found!")
        self.order_id = order_id


class ProductNotFound(NotFound):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class DiscountRuleNotFound(NotFound):
    pass


class AlreadyTerminal(Conflict):
    """The order has reached a state where reminders no longer apply."""


__all__ = [
    "AlreadyTerminal",
    "DiscountRuleNotFound",
    "InvalidCartComposition",
    "InvalidPaymentType",
    "InvalidStatus",
    "InvalidStatusTransition",
    "MissingPaymentProof",
    "OrderNotFound",
    "ProductNotFound",
    "Unauthorized",
]
