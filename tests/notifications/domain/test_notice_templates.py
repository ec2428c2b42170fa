"""Tests for notice templates and the template registry."""

import pytest

from notifications.templates import TEMPLATE_REGISTRY, NoticeType, get_template, render


class TestTemplateRegistry:
    def test_every_notice_type_has_a_template(self):
        for notice_type in NoticeType:
            assert notice_type.value in TEMPLATE_REGISTRY

    def test_unknown_notice_type(self):
        with pytest.raises(ValueError):
            get_template("Birthday")


class TestOrderPlacedTemplates:
    CONTEXT = {
        "order_id": "o-1",
        "buyer_name": "Aung Aung",
        "shop_name": "Golden Phones",
        "payment_type": "Cash on Delivery",
        "items": [{"product_id": "7", "title": "Phone X", "quantity": 2}, {"product_id": "8", "quantity": 1}],
    }

    def test_admin_notice(self):
        notice = render(NoticeType.ORDER_PLACED_ADMIN.value, self.CONTEXT)

        assert notice["title"] == "New Order Received"
        assert "Aung Aung placed Order ID #o-1 at Golden Phones" in notice["message"]
        assert "2 item(s)" in notice["message"]

    def test_seller_notice_lists_items(self):
        notice = render(NoticeType.ORDER_PLACED_SELLER.value, self.CONTEXT)

        assert notice["title"] == "New Order"
        assert "Phone X x2, 8 x1" in notice["message"]


class TestOrderStatusTemplates:
    def test_buyer_shipped_notice(self):
        notice = render(NoticeType.ORDER_STATUS_BUYER.value, {"order_id": "o-1", "status": "Shipped"})

        assert notice == {"title": "Order Shipped", "message": "Good news! Your order #o-1 has been shipped."}

    def test_admin_return_alert(self):
        notice = render(
            NoticeType.ORDER_STATUS_ADMIN.value,
            {"order_id": "o-1", "status": "Returned", "user_name": "Aung Aung"},
        )

        assert notice["title"] == "Return Request Submitted"
        assert notice["message"] == "Return requested by Aung Aung for Order ID #o-1 - please review and process."

    def test_buyer_notice_for_unlisted_status(self):
        notice = render(NoticeType.ORDER_STATUS_BUYER.value, {"order_id": "o-1", "status": "Teleported"})

        assert notice["message"] == "Your order #o-1 is now Teleported."


class TestSellerReminderTemplate:
    def test_reminder(self):
        notice = render(
            NoticeType.SELLER_REMINDER.value,
            {"order_id": "o-1", "buyer_name": "Aung Aung", "status": "Pending"},
        )

        assert notice["title"] == "Urgent: Order Reminder"
        assert notice["message"].startswith("Aung Aung is waiting on Order ID #o-1 (currently Pending).")
