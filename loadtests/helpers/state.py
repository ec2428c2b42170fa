"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared between
users.
"""

from dataclasses import dataclass, field


@dataclass
class OrderState:
    """Tracks a single simulated order through its lifecycle."""

    order_id: str | None = None
    current_status: str = "Pending"
    reminded: bool = False


@dataclass
class InboxState:
    """Tracks notifications seen by a simulated user."""

    notification_ids: list[str] = field(default_factory=list)
    push_token_id: str | None = None
