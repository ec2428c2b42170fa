"""Domain events for the Order aggregate.

Events are versioned, immutable facts. Item and address payloads are
carried as JSON text so the events serialize cleanly to the outbox.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """An order was admitted: stock reserved and prices frozen."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    currency_id = Identifier(required=True)
    payment_type = String(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    order_total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_by_role = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class InvoiceAttached:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    invoice_url = String(required=True, max_length=1000)
    attached_at = DateTime(required=True)


@ordering.event(part_of="Order")
class SellerReminded:
    """The buyer asked the seller to act on an order urgently."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    status = String(required=True)
    reminded_at = DateTime(required=True)
