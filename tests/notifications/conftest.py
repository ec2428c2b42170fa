import pytest


@pytest.fixture(autouse=True)
def _notifications_ctx():
    """Run every notifications test inside the notifications domain context."""
    from notifications.domain import notifications

    ctx = notifications.domain_context()
    ctx.push()

    yield notifications

    ctx.pop()
