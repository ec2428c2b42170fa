"""Order aggregate (CQRS) — a buyer's purchase from a single shop.

An order is created only by admission, after stock has been reserved and
every line has been priced. Line prices are snapshots: later catalogue or
discount changes never touch an existing order. Orders are never deleted.

State Machine (11 states):
    Main flow (forward only, skips allowed):
        PENDING → PROCESSING → SHIPPED → DELIVERED → COMPLETED
    Side branches, reachable from any non-terminal state:
        CANCELLED, RETURNED, REFUNDED, FAILED, ON_HOLD, BACKORDERED
    ON_HOLD / BACKORDERED may re-enter any main-flow state.
    CANCELLED / RETURNED → REFUNDED
    COMPLETED, REFUNDED, FAILED are terminal.
"""

import json
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering
from ordering.exceptions import AlreadyTerminal, InvalidStatus, InvalidStatusTransition
from ordering.order.events import InvoiceAttached, OrderPlaced, OrderStatusChanged, SellerReminded


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"
    REFUNDED = "Refunded"
    FAILED = "Failed"
    ON_HOLD = "On Hold"
    BACKORDERED = "Backordered"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidStatus(f"Invalid order status: {value}") from exc


class PaymentType(Enum):
    FULL_PREPAID = "Full Prepaid"
    HALF_PREPAID = "Half Prepaid"
    CASH_ON_DELIVERY = "Cash on Delivery"


_MAIN_FLOW = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.COMPLETED,
]

_SIDE_BRANCHES = {
    OrderStatus.CANCELLED,
    OrderStatus.RETURNED,
    OrderStatus.REFUNDED,
    OrderStatus.FAILED,
    OrderStatus.ON_HOLD,
    OrderStatus.BACKORDERED,
}


def _build_transitions():
    transitions = {}
    for position, status in enumerate(_MAIN_FLOW[:-1]):
        transitions[status] = set(_MAIN_FLOW[position + 1 :]) | _SIDE_BRANCHES
    for paused in (OrderStatus.ON_HOLD, OrderStatus.BACKORDERED):
        transitions[paused] = (set(_MAIN_FLOW) | _SIDE_BRANCHES) - {paused}
    transitions[OrderStatus.CANCELLED] = {OrderStatus.REFUNDED}
    transitions[OrderStatus.RETURNED] = {OrderStatus.REFUNDED}
    transitions[OrderStatus.COMPLETED] = set()  # Terminal
    transitions[OrderStatus.REFUNDED] = set()  # Terminal
    transitions[OrderStatus.FAILED] = set()  # Terminal
    return transitions


_VALID_TRANSITIONS = _build_transitions()

# Once here, reminding the seller is pointless
_REMINDER_CLOSED_STATES = {
    OrderStatus.COMPLETED,
    OrderStatus.REFUNDED,
    OrderStatus.CANCELLED,
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address captured at admission, independent of later profile edits."""

    home_address = String(max_length=255)
    street_address = String(max_length=255)
    ward = String(max_length=100)
    township = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(required=True, max_length=100)
    note = String(max_length=500)

    def one_line(self) -> str:
        parts = [
            self.home_address,
            self.street_address,
            self.ward,
            self.township,
            self.city,
            self.state,
            self.country,
        ]
        return ", ".join(part for part in parts if part)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A priced order line. ``unit_price`` is the post-discount price at admission."""

    product_id = String(required=True, max_length=64)
    shop_id = Identifier(required=True)
    currency_id = Identifier(required=True)
    title = String(max_length=255)
    brand_name = String(max_length=255)
    product_model = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    base_price = Float(min_value=0.0)
    discount_percent = Float(default=0.0)
    discount_type = String(max_length=100)
    discount_reason = String(max_length=500)

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    buyer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    currency_id = Identifier(required=True)
    currency_symbol = String(max_length=10)
    payment_type = String(choices=PaymentType, required=True)
    payslip_reference = String(max_length=500)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    order_total = Float(default=0.0)
    invoice_number = String(max_length=50)
    invoice_url = String(max_length=1000)
    status_updated_by = Identifier()
    status_updated_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def items_must_belong_to_order_shop_and_currency(self):
        for item in self.items or []:
            if str(item.shop_id) != str(self.shop_id):
                raise ValidationError({"items": ["Every item must belong to the order's shop"]})
            if str(item.currency_id) != str(self.currency_id):
                raise ValidationError({"items": ["Every item must use the order's currency"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        buyer_id,
        shop_id,
        currency_id,
        payment_type,
        lines,
        shipping_address=None,
        payslip_reference=None,
        currency_symbol=None,
    ):
        """Create a PENDING order from priced lines.

        Args:
            lines: List of dicts with product_id, quantity, unit_price and
                optionally title, brand_name, product_model, base_price,
                discount_percent, discount_type, discount_reason.
            shipping_address: Dict matching ShippingAddress fields.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                shop_id=shop_id,
                currency_id=currency_id,
                **line,
            )
            for line in lines
        ]
        order_total = round(sum(item.unit_price * item.quantity for item in items), 2)

        order = cls(
            buyer_id=buyer_id,
            shop_id=shop_id,
            currency_id=currency_id,
            currency_symbol=currency_symbol,
            payment_type=payment_type,
            payslip_reference=payslip_reference,
            status=OrderStatus.PENDING.value,
            items=items,
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            order_total=order_total,
            invoice_number=f"INV-{uuid4().hex[:8].upper()}",
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                shop_id=str(shop_id),
                currency_id=str(currency_id),
                payment_type=payment_type,
                items=json.dumps([order._item_summary(item) for item in order.items]),
                order_total=order_total,
                placed_at=now,
            )
        )
        return order

    @staticmethod
    def _item_summary(item):
        return {
            "product_id": item.product_id,
            "title": item.title,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
        }

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: OrderStatus):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStatusTransition(f"Cannot transition from {current.value} to {target_status.value}")

    def transition_to(self, status, changed_by, changed_by_role):
        target = OrderStatus.parse(status)
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.status_updated_by = changed_by
        self.status_updated_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                shop_id=str(self.shop_id),
                previous_status=previous,
                new_status=target.value,
                changed_by=str(changed_by),
                changed_by_role=changed_by_role,
                changed_at=now,
            )
        )

    def attach_invoice(self, invoice_url):
        now = datetime.now(UTC)
        self.invoice_url = invoice_url
        self.updated_at = now
        self.raise_(
            InvoiceAttached(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                invoice_url=invoice_url,
                attached_at=now,
            )
        )

    def remind_seller(self):
        """Record an urgent reminder from the buyer."""
        if OrderStatus(self.status) in _REMINDER_CLOSED_STATES:
            raise AlreadyTerminal(f"Order is already {self.status}")

        self.raise_(
            SellerReminded(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                shop_id=str(self.shop_id),
                status=self.status,
                reminded_at=datetime.now(UTC),
            )
        )

    @property
    def product_ids(self) -> list[str]:
        return [item.product_id for item in self.items]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
@ordering.repository(part_of=Order)
class OrderRepository:
    def search(
        self,
        buyer_id=None,
        from_date: date | None = None,
        to_date: date | None = None,
        from_amount: float | None = None,
        to_amount: float | None = None,
        page: int = 1,
        per_page: int | None = None,
    ):
        """Orders newest first, filtered by any of the given bounds.

        Date bounds are inclusive calendar days in UTC and amount bounds are
        inclusive. Without ``per_page`` every match is returned.

        Returns:
            ResultSet whose ``total`` counts all matches across pages.
        """
        filters = {}
        if buyer_id is not None:
            filters["buyer_id"] = str(buyer_id)
        if from_date is not None:
            filters["created_at__gte"] = datetime.combine(from_date, time.min, tzinfo=UTC)
        if to_date is not None:
            filters["created_at__lt"] = datetime.combine(to_date + timedelta(days=1), time.min, tzinfo=UTC)
        if from_amount is not None:
            filters["order_total__gte"] = from_amount
        if to_amount is not None:
            filters["order_total__lte"] = to_amount

        query = self._dao.query.filter(**filters).order_by("-created_at")
        if per_page is not None:
            query = query.offset((page - 1) * per_page)
        return query.limit(per_page).all()
