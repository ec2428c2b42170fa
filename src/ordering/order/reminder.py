"""Urgent seller reminder, requested by the buyer of an order."""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from identity.principal import Principal
from ordering.domain import ordering
from ordering.exceptions import Unauthorized
from ordering.order.order import Order
from ordering.order.status_update import load_order
from ordering.order.tasks import submit_seller_reminder

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class RemindSeller:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class RemindSellerHandler:
    @handle(RemindSeller)
    def remind_seller(self, command):
        order = load_order(command.order_id)
        if str(order.buyer_id) != str(command.requested_by):
            raise Unauthorized("Unauthorized!")

        order.remind_seller()
        current_domain.repository_for(Order).add(order)


def remind_seller(principal: Principal, order_id) -> None:
    current_domain.process(
        RemindSeller(order_id=str(order_id), requested_by=principal.user_id),
        asynchronous=False,
    )
    logger.info("Seller reminder requested", order_id=str(order_id), buyer_id=principal.user_id)

    submit_seller_reminder(str(order_id))
