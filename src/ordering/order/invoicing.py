"""Invoice generation — render, store and announce an order's PDF invoice.

Runs as background work after admission. A render that yields no URL
leaves the order without an invoice; the order itself stays valid.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from identity.directory import get_directory
from ordering.catalogue import get_catalogue
from ordering.domain import ordering
from ordering.invoice import get_renderer
from ordering.invoice.document import InvoiceDocument, InvoiceLine
from ordering.order.order import Order
from ordering.realtime import get_realtime_bus

logger = structlog.get_logger(__name__)

INVOICE_EVENT = "new-invoice"


@ordering.command(part_of="Order")
class AttachInvoice:
    order_id = Identifier(required=True)
    invoice_url = String(required=True, max_length=1000)


@ordering.command_handler(part_of=Order)
class AttachInvoiceHandler:
    @handle(AttachInvoice)
    def attach_invoice(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_invoice(command.invoice_url)
        repo.add(order)


def build_invoice_document(order: Order) -> InvoiceDocument:
    buyer = get_directory().get_user_profile(str(order.buyer_id))
    shop = get_catalogue().get_shop_profile(str(order.shop_id))
    address = order.shipping_address

    return InvoiceDocument(
        invoice_number=order.invoice_number or "",
        order_id=str(order.id),
        order_date=order.created_at.strftime("%d %B %Y") if order.created_at else "",
        payment_type=order.payment_type,
        currency_symbol=order.currency_symbol or "",
        customer_name=buyer.name if buyer else "",
        customer_phone=(buyer.phone or "") if buyer else "",
        customer_address=address.one_line() if address else "",
        shop_name=shop.name if shop else "",
        seller_phone=(shop.phone or "") if shop else "",
        seller_address=(shop.address or "") if shop else "",
        note=(address.note or "") if address else "",
        lines=[
            InvoiceLine(
                brand_name=item.brand_name or "",
                model=item.product_model or item.title or "",
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in order.items
        ],
    )


def generate_invoice(order_id: str) -> str | None:
    """Render the invoice for an order, attach its URL and notify the buyer live."""
    with ordering.domain_context():
        order = current_domain.repository_for(Order).get(order_id)
        buyer_id = str(order.buyer_id)
        html = build_invoice_document(order).render()

        invoice_url = get_renderer().render_to_pdf(html)
        if not invoice_url:
            logger.warning("Invoice render produced no document", order_id=order_id)
            return None

        current_domain.process(AttachInvoice(order_id=order_id, invoice_url=invoice_url), asynchronous=False)
        logger.info("Invoice attached", order_id=order_id, invoice_url=invoice_url)

    try:
        get_realtime_bus().emit(INVOICE_EVENT, [buyer_id], {"invoice_url": invoice_url, "order_id": order_id})
    except Exception as e:
        logger.error("Invoice event emit failed", order_id=order_id, error=str(e))

    return invoice_url
