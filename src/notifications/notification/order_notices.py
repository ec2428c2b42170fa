"""Order lifecycle notices — entry points used by ordering's background work.

Each function renders the matching templates and fans the result out.
Callers pass plain values so this context never loads ordering aggregates.
Must be called inside the notifications domain context.
"""

import structlog
from identity.principal import Role
from notifications.notification.dispatch import NotificationDispatcher
from notifications.templates import NoticeType, render
from notifications.templates.order_status import ADMIN_ALERT_STATUSES

logger = structlog.get_logger(__name__)


def _order_payload(order_id) -> dict:
    return {"redirect": "order-detail", "id": str(order_id)}


def notify_order_placed(order_id, buyer_name, shop_name, payment_type, items, seller_ids, dispatcher=None):
    """Tell every admin and every seller of the ordered products about a new order."""
    dispatcher = dispatcher or NotificationDispatcher()
    context = {
        "order_id": str(order_id),
        "buyer_name": buyer_name,
        "shop_name": shop_name,
        "payment_type": payment_type,
        "items": items,
    }
    payload = _order_payload(order_id)

    admin_notice = render(NoticeType.ORDER_PLACED_ADMIN.value, context)
    admin_ids = dispatcher.notify_role(Role.ADMIN.value, admin_notice["title"], admin_notice["message"], payload)

    seller_notice = render(NoticeType.ORDER_PLACED_SELLER.value, context)
    seller_ids = dispatcher.notify(seller_ids, seller_notice["title"], seller_notice["message"], payload)

    logger.info(
        "Order placed notices dispatched",
        order_id=str(order_id),
        admin_notifications=len(admin_ids),
        seller_notifications=len(seller_ids),
    )
    return admin_ids + seller_ids


def notify_status_changed(order_id, buyer_id, buyer_name, new_status, changed_by_role, dispatcher=None):
    """Tell the buyer about the new status; alert admins about buyer-driven endings."""
    dispatcher = dispatcher or NotificationDispatcher()
    context = {"order_id": str(order_id), "status": new_status, "user_name": buyer_name}
    payload = _order_payload(order_id)

    buyer_notice = render(NoticeType.ORDER_STATUS_BUYER.value, context)
    notification_ids = dispatcher.notify_user(buyer_id, buyer_notice["title"], buyer_notice["message"], payload)

    if changed_by_role != Role.ADMIN.value and new_status in ADMIN_ALERT_STATUSES:
        admin_notice = render(NoticeType.ORDER_STATUS_ADMIN.value, context)
        notification_ids += dispatcher.notify_role(
            Role.ADMIN.value, admin_notice["title"], admin_notice["message"], payload
        )

    return notification_ids


def notify_seller_reminder(order_id, buyer_name, status, seller_ids, dispatcher=None):
    """Urgent reminder from the buyer to the order's sellers and all admins."""
    dispatcher = dispatcher or NotificationDispatcher()
    notice = render(
        NoticeType.SELLER_REMINDER.value,
        {"order_id": str(order_id), "buyer_name": buyer_name, "status": status},
    )
    payload = _order_payload(order_id)
    notification_ids = dispatcher.notify(seller_ids, notice["title"], notice["message"], payload)
    notification_ids += dispatcher.notify_role(Role.ADMIN.value, notice["title"], notice["message"], payload)
    return notification_ids
