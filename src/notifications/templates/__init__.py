"""Template registry — maps notice types to template classes.

Each template renders a ``{"title", "message"}`` pair from a context
dict built by the caller.
"""

from enum import Enum

from notifications.templates.order_placed import OrderPlacedAdminTemplate, OrderPlacedSellerTemplate
from notifications.templates.order_status import OrderStatusAdminTemplate, OrderStatusBuyerTemplate
from notifications.templates.seller_reminder import SellerReminderTemplate


class NoticeType(Enum):
    ORDER_PLACED_ADMIN = "OrderPlacedAdmin"
    ORDER_PLACED_SELLER = "OrderPlacedSeller"
    ORDER_STATUS_BUYER = "OrderStatusBuyer"
    ORDER_STATUS_ADMIN = "OrderStatusAdmin"
    SELLER_REMINDER = "SellerReminder"


TEMPLATE_REGISTRY: dict[str, type] = {
    NoticeType.ORDER_PLACED_ADMIN.value: OrderPlacedAdminTemplate,
    NoticeType.ORDER_PLACED_SELLER.value: OrderPlacedSellerTemplate,
    NoticeType.ORDER_STATUS_BUYER.value: OrderStatusBuyerTemplate,
    NoticeType.ORDER_STATUS_ADMIN.value: OrderStatusAdminTemplate,
    NoticeType.SELLER_REMINDER.value: SellerReminderTemplate,
}


def get_template(notice_type: str):
    """Look up a template class by notice type string."""
    template_cls = TEMPLATE_REGISTRY.get(notice_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notice type: {notice_type}")
    return template_cls


def render(notice_type: str, context: dict) -> dict:
    return get_template(notice_type).render(context)
