"""Order listing — a buyer's own orders, or every order for agents and admins."""

import math
from dataclasses import dataclass
from datetime import date

from protean.utils.globals import current_domain

from identity.principal import Principal, Role
from ordering.order.order import Order
from shared.errors import InvalidListLimit


@dataclass(frozen=True)
class OrderPage:
    orders: list[Order]
    total: int
    page: int
    per_page: int | None

    @property
    def page_counts(self) -> int:
        if not self.per_page:
            return 1 if self.total else 0
        return math.ceil(self.total / self.per_page)


def list_orders(
    principal: Principal,
    from_date: date | None = None,
    to_date: date | None = None,
    from_amount: float | None = None,
    to_amount: float | None = None,
    page: int = 1,
    per_page: int | None = None,
) -> OrderPage:
    if page < 1 or (per_page is not None and per_page < 1):
        raise InvalidListLimit("page and per_page must be positive numbers")

    # Agents and admins see the whole marketplace
    buyer_id = None if principal.role in (Role.ADMIN.value, Role.AGENT.value) else principal.user_id

    result = current_domain.repository_for(Order).search(
        buyer_id=buyer_id,
        from_date=from_date,
        to_date=to_date,
        from_amount=from_amount,
        to_amount=to_amount,
        page=page,
        per_page=per_page,
    )
    return OrderPage(orders=list(result.items), total=result.total, page=page, per_page=per_page)
