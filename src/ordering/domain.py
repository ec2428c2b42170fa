"""Ordering bounded context — order admission and the order lifecycle.

Handles admission of carts into orders (stock reservation, discount
pricing, persistence), the order status state machine with its role
policy, seller reminders, and invoice attachment.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
