"""Application tests for order status updates — policy, state machine, buyer notice."""

import pytest
from protean import current_domain

from notifications.domain import notifications
from notifications.notification.inbox import list_notifications
from ordering.exceptions import InvalidStatus, InvalidStatusTransition, OrderNotFound, Unauthorized
from ordering.order.admission import OrderAdmission
from ordering.order.order import Order
from ordering.order.status_update import UpdateOrderStatus, update_order_status
from ordering.order.validation import CartLine


@pytest.fixture()
def order_id(buyer, shop, task_queue):
    result = OrderAdmission().admit(principal=buyer, lines=[CartLine("8", 1)], payment_type="Cash on Delivery")
    task_queue.reset()
    return result.order_id


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


def _inbox(user_id):
    with notifications.domain_context():
        return list_notifications(user_id)


class TestAllowedUpdates:
    def test_admin_ships_an_order(self, admin, order_id):
        order = update_order_status(admin, order_id, "Shipped")

        assert order.status == "Shipped"
        assert _status(order_id) == "Shipped"
        assert order.status_updated_by == "admin-1"

    def test_agent_with_permission_moves_order(self, agent, order_id):
        update_order_status(agent, order_id, "Processing")

        assert _status(order_id) == "Processing"

    def test_buyer_cancels_own_order(self, buyer, order_id):
        update_order_status(buyer, order_id, "Cancelled")

        assert _status(order_id) == "Cancelled"


class TestRejectedUpdates:
    def test_buyer_may_not_ship(self, buyer, order_id, task_queue):
        with pytest.raises(Unauthorized):
            update_order_status(buyer, order_id, "Shipped")

        assert _status(order_id) == "Pending"
        assert task_queue.pending == []

    def test_other_buyer_may_not_cancel(self, other_buyer, order_id):
        with pytest.raises(Unauthorized):
            update_order_status(other_buyer, order_id, "Cancelled")

        assert _status(order_id) == "Pending"

    def test_restricted_agent_is_rejected(self, restricted_agent, order_id):
        with pytest.raises(Unauthorized):
            update_order_status(restricted_agent, order_id, "Processing")

    def test_unknown_status_is_rejected_before_lookup(self, admin):
        with pytest.raises(InvalidStatus):
            update_order_status(admin, "no-such-order", "Lost")

    def test_missing_order(self, admin):
        with pytest.raises(OrderNotFound) as exc:
            update_order_status(admin, "no-such-order", "Shipped")

        assert exc.value.message == "Order not found!"

    def test_completed_order_cannot_be_cancelled(self, admin, buyer, order_id):
        update_order_status(buyer, order_id, "Completed")

        with pytest.raises(InvalidStatusTransition):
            update_order_status(admin, order_id, "Cancelled")

        assert _status(order_id) == "Completed"

    def test_backward_move_is_rejected(self, admin, order_id):
        update_order_status(admin, order_id, "Delivered")

        with pytest.raises(InvalidStatusTransition):
            update_order_status(admin, order_id, "Processing")


class TestStatusNotices:
    def test_buyer_notice_is_queued(self, admin, order_id, task_queue):
        update_order_status(admin, order_id, "Shipped")

        assert task_queue.pending_names == ["order-status-notice"]

    def test_buyer_is_told_about_shipment(self, admin, order_id, task_queue):
        update_order_status(admin, order_id, "Shipped")
        task_queue.run_pending()

        inbox = _inbox("buyer-1")
        assert len(inbox) == 1
        assert inbox[0].title == "Order Shipped"
        assert inbox[0].message == f"Good news! Your order #{order_id} has been shipped."
        assert inbox[0].payload_data == {"redirect": "order-detail", "id": order_id}
        # Admin-driven updates raise no admin alert
        assert _inbox("admin-1") == []

    def test_buyer_return_alerts_admins(self, admin, buyer, order_id, task_queue):
        update_order_status(admin, order_id, "Delivered")
        update_order_status(buyer, order_id, "Returned")
        task_queue.run_pending()

        admin_inbox = _inbox("admin-1")
        assert [n.title for n in admin_inbox] == ["Return Request Submitted"]
        assert "Aung Aung" in admin_inbox[0].message
        assert {n.title for n in _inbox("buyer-1")} == {"Order Delivered", "Order Returned"}


class TestUpdateOrderStatusCommand:
    def test_handler_applies_policy_and_transition(self, order_id):
        previous = current_domain.process(
            UpdateOrderStatus(
                order_id=order_id,
                status="Processing",
                changed_by="agent-1",
                changed_by_role="agent",
                can_modify_order_status=True,
            ),
            asynchronous=False,
        )

        assert previous == "Pending"
        assert _status(order_id) == "Processing"

    def test_handler_rejects_agent_without_permission(self, order_id):
        with pytest.raises(Unauthorized):
            current_domain.process(
                UpdateOrderStatus(order_id=order_id, status="Processing", changed_by="agent-2", changed_by_role="agent"),
                asynchronous=False,
            )

        assert _status(order_id) == "Pending"
