"""Background work submitted by the order lifecycle.

Each ``submit_*`` function hands a task to the background queue and
returns at once. The task bodies run on a worker with no ambient domain
context, so each pushes the contexts it needs: ordering to read the
order, notifications to fan the notice out.
"""

import structlog
from protean.utils.globals import current_domain

from identity.directory import get_directory
from ordering.catalogue import get_catalogue
from ordering.domain import ordering
from ordering.order.invoicing import generate_invoice
from ordering.order.order import Order
from shared.background import submit

logger = structlog.get_logger(__name__)


def _buyer_name(buyer_id) -> str:
    profile = get_directory().get_user_profile(str(buyer_id))
    return profile.name if profile else ""


def _seller_ids(order: Order) -> list[str]:
    catalogue = get_catalogue()
    seller_ids = []
    for product_id in order.product_ids:
        product = catalogue.get_product_pricing(product_id)
        if product is None:
            logger.warning("Product vanished from catalogue", order_id=str(order.id), product_id=product_id)
            continue
        if product.creator_id not in seller_ids:
            seller_ids.append(product.creator_id)
    return seller_ids


def _load_order(order_id) -> Order:
    with ordering.domain_context():
        return current_domain.repository_for(Order).get(order_id)


def notify_order_placed(order_id: str) -> list[str]:
    from notifications.domain import notifications
    from notifications.notification.order_notices import notify_order_placed as dispatch

    order = _load_order(order_id)
    shop = get_catalogue().get_shop_profile(str(order.shop_id))
    with notifications.domain_context():
        return dispatch(
            order_id=order_id,
            buyer_name=_buyer_name(order.buyer_id),
            shop_name=shop.name if shop else "",
            payment_type=order.payment_type,
            items=[{"product_id": i.product_id, "title": i.title, "quantity": i.quantity} for i in order.items],
            seller_ids=_seller_ids(order),
        )


def notify_status_changed(order_id: str, new_status: str, changed_by_role: str) -> list[str]:
    from notifications.domain import notifications
    from notifications.notification.order_notices import notify_status_changed as dispatch

    order = _load_order(order_id)
    with notifications.domain_context():
        return dispatch(
            order_id=order_id,
            buyer_id=str(order.buyer_id),
            buyer_name=_buyer_name(order.buyer_id),
            new_status=new_status,
            changed_by_role=changed_by_role,
        )


def notify_seller_reminder(order_id: str) -> list[str]:
    from notifications.domain import notifications
    from notifications.notification.order_notices import notify_seller_reminder as dispatch

    order = _load_order(order_id)
    with notifications.domain_context():
        return dispatch(
            order_id=order_id,
            buyer_name=_buyer_name(order.buyer_id),
            status=order.status,
            seller_ids=_seller_ids(order),
        )


def submit_order_placed_notice(order_id: str) -> None:
    submit("order-placed-notice", notify_order_placed, order_id=order_id)


def submit_invoice_generation(order_id: str) -> None:
    submit("invoice-generation", generate_invoice, order_id=order_id)


def submit_status_notice(order_id: str, new_status: str, changed_by_role: str) -> None:
    submit(
        "order-status-notice",
        notify_status_changed,
        order_id=order_id,
        new_status=new_status,
        changed_by_role=changed_by_role,
    )


def submit_seller_reminder(order_id: str) -> None:
    submit("seller-reminder-notice", notify_seller_reminder, order_id=order_id)
