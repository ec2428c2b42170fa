"""Tests for the Order aggregate — placement, priced lines and invariants."""

import pytest
from protean.exceptions import ValidationError

from ordering.exceptions import AlreadyTerminal
from ordering.order.events import InvoiceAttached, OrderPlaced, SellerReminded
from ordering.order.order import Order, OrderItem, OrderStatus, PaymentType


def _lines():
    return [
        {
            "product_id": "7",
            "title": "Phone X",
            "quantity": 2,
            "unit_price": 90.0,
            "base_price": 100.0,
            "discount_percent": 10.0,
            "discount_type": "Discount by Specific Percentage",
            "discount_reason": "Festival",
        },
        {"product_id": "8", "title": "Phone Case", "quantity": 1, "unit_price": 40.0, "base_price": 40.0},
    ]


def _place(**overrides):
    kwargs = {
        "buyer_id": "buyer-1",
        "shop_id": "shop-1",
        "currency_id": "mmk",
        "payment_type": PaymentType.CASH_ON_DELIVERY.value,
        "lines": _lines(),
        "shipping_address": {"city": "Yangon", "country": "Myanmar", "street_address": "Bogyoke Road"},
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


class TestOrderPlacement:
    def test_new_order_is_pending(self):
        order = _place()

        assert order.status == OrderStatus.PENDING.value
        assert order.buyer_id == "buyer-1"
        assert len(order.items) == 2

    def test_order_total_uses_discounted_unit_prices(self):
        order = _place()

        assert order.order_total == 220.0

    def test_items_inherit_shop_and_currency(self):
        order = _place()

        for item in order.items:
            assert item.shop_id == "shop-1"
            assert item.currency_id == "mmk"

    def test_invoice_number_is_assigned(self):
        order = _place()

        assert order.invoice_number.startswith("INV-")
        assert order.invoice_url is None

    def test_shipping_address_is_captured(self):
        order = _place()

        assert order.shipping_address.city == "Yangon"
        assert order.shipping_address.one_line() == "Bogyoke Road, Yangon, Myanmar"

    def test_place_raises_order_placed(self):
        order = _place()

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.order_total == 220.0

    def test_product_ids(self):
        assert _place().product_ids == ["7", "8"]

    def test_payment_type_must_be_known(self):
        with pytest.raises(ValidationError):
            _place(payment_type="Barter")


class TestOrderInvariants:
    def _order_with(self, item):
        return Order(
            buyer_id="buyer-1",
            shop_id="shop-1",
            currency_id="mmk",
            payment_type=PaymentType.CASH_ON_DELIVERY.value,
            items=[item],
        )

    def test_item_from_another_shop_is_rejected(self):
        item = OrderItem(product_id="9", shop_id="shop-2", currency_id="mmk", quantity=1, unit_price=1.0)

        with pytest.raises(ValidationError) as exc:
            self._order_with(item)

        assert "items" in exc.value.messages

    def test_item_in_another_currency_is_rejected(self):
        item = OrderItem(product_id="10", shop_id="shop-1", currency_id="usd", quantity=1, unit_price=1.0)

        with pytest.raises(ValidationError):
            self._order_with(item)

    def test_item_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="7", shop_id="shop-1", currency_id="mmk", quantity=0, unit_price=1.0)


class TestOrderItem:
    def test_line_total(self):
        item = OrderItem(product_id="7", shop_id="shop-1", currency_id="mmk", quantity=3, unit_price=12.5)

        assert item.line_total == 37.5


class TestInvoiceAttachment:
    def test_attach_invoice_sets_url(self):
        order = _place()
        order._events.clear()

        order.attach_invoice("https://files.example.com/invoices/abc.pdf")

        assert order.invoice_url == "https://files.example.com/invoices/abc.pdf"
        assert isinstance(order._events[-1], InvoiceAttached)


class TestSellerReminder:
    def test_reminder_on_open_order(self):
        order = _place()
        order._events.clear()

        order.remind_seller()

        assert isinstance(order._events[-1], SellerReminded)
        assert order._events[-1].status == OrderStatus.PENDING.value

    @pytest.mark.parametrize("status", ["Completed", "Refunded", "Cancelled"])
    def test_reminder_on_closed_order_is_rejected(self, status):
        order = _place()
        order.status = status

        with pytest.raises(AlreadyTerminal):
            order.remind_seller()
