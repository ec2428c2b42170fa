"""Who may move an order to which status.

    user   Cancelled, Returned or Completed, and only on their own orders
    agent  any status, when granted ``can_modify_order_status``
    admin  any status
    other  nothing

The policy only answers "may this caller ask for this status"; whether
the order can actually move there is the state machine's decision.
"""

from identity.principal import Principal, Role
from ordering.exceptions import Unauthorized
from ordering.order.order import OrderStatus

BUYER_SETTABLE_STATUSES = frozenset(
    {
        OrderStatus.CANCELLED,
        OrderStatus.RETURNED,
        OrderStatus.COMPLETED,
    }
)


def authorize_status_change(principal: Principal, target: OrderStatus, buyer_id) -> None:
    if principal.role == Role.ADMIN.value:
        return

    if principal.role == Role.AGENT.value:
        if principal.can_modify_order_status:
            return
        raise Unauthorized("Unauthorized!")

    if principal.role == Role.USER.value:
        if target in BUYER_SETTABLE_STATUSES and str(buyer_id) == str(principal.user_id):
            return
        raise Unauthorized("Unauthorized!")

    raise Unauthorized("Unauthorized!")


def can_view_order(principal: Principal, buyer_id) -> bool:
    if principal.role in (Role.ADMIN.value, Role.AGENT.value):
        return True
    return str(buyer_id) == str(principal.user_id)
