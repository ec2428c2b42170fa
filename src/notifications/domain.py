"""Notifications bounded context — in-app inbox and push fan-out.

Stores one Notification per recipient for every order lifecycle notice
and pushes it to each device the recipient has registered. Push delivery
is best effort: a failing device never blocks the others.
"""

import structlog
from protean.domain import Domain

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
