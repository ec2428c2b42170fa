"""Order status updates — role policy, state machine, then buyer notice."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from identity.principal import Principal
from ordering.domain import ordering
from ordering.exceptions import OrderNotFound
from ordering.order.authorization import authorize_status_change
from ordering.order.order import Order, OrderStatus
from ordering.order.tasks import submit_status_notice

logger = structlog.get_logger(__name__)


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError as exc:
        raise OrderNotFound(str(order_id)) from exc


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    changed_by = Identifier(required=True)
    changed_by_role = String(required=True, max_length=20)
    can_modify_order_status = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        """Check the status value, then the role policy, then transition.

        Returns:
            The status the order moved away from.
        """
        target = OrderStatus.parse(command.status)
        order = load_order(command.order_id)
        principal = Principal(
            user_id=command.changed_by,
            role=command.changed_by_role,
            can_modify_order_status=bool(command.can_modify_order_status),
        )
        authorize_status_change(principal, target, order.buyer_id)

        previous = order.status
        order.transition_to(target.value, changed_by=command.changed_by, changed_by_role=command.changed_by_role)
        current_domain.repository_for(Order).add(order)
        return previous


def update_order_status(principal: Principal, order_id, status) -> Order:
    """Move an order to ``status`` on behalf of ``principal``.

    The buyer notice is queued only after the new status is committed.
    """
    previous = current_domain.process(
        UpdateOrderStatus(
            order_id=str(order_id),
            status=str(status),
            changed_by=principal.user_id,
            changed_by_role=principal.role,
            can_modify_order_status=principal.can_modify_order_status,
        ),
        asynchronous=False,
    )
    order = load_order(order_id)

    logger.info(
        "Order status updated",
        order_id=str(order.id),
        previous_status=previous,
        new_status=order.status,
        changed_by=principal.user_id,
        role=principal.role,
    )

    submit_status_notice(str(order.id), order.status, principal.role)
    return order
