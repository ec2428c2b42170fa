"""Invoice HTML document.

Every value is HTML-escaped before substitution; the row markup is the
only unescaped fragment and is built here from escaped values.
"""

from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from string import Template

_TEMPLATE = Template(Path(__file__).with_name("invoice.html").read_text(encoding="utf-8"))


@dataclass
class InvoiceLine:
    brand_name: str
    model: str
    quantity: int
    unit_price: float

    @property
    def total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@dataclass
class InvoiceDocument:
    invoice_number: str
    order_id: str
    order_date: str
    payment_type: str
    currency_symbol: str
    customer_name: str
    customer_phone: str
    customer_address: str
    shop_name: str
    seller_phone: str
    seller_address: str
    note: str = ""
    lines: list[InvoiceLine] = field(default_factory=list)

    @property
    def sub_total(self) -> float:
        return round(sum(line.total for line in self.lines), 2)

    def _money(self, amount: float) -> str:
        return f"{escape(self.currency_symbol)} {amount:,.2f}"

    def _rows(self) -> str:
        rows = []
        for line in sorted(self.lines, key=lambda item: (item.brand_name, item.model)):
            rows.append(
                '<div class="flex row">'
                f'<div style="text-align: left">{escape(line.brand_name)} {escape(line.model)}</div>'
                f"<div>{line.quantity}</div>"
                f"<div>{self._money(line.unit_price)}</div>"
                f"<div>{self._money(line.total)}</div>"
                "</div>"
            )
        return "\n".join(rows)

    def render(self) -> str:
        values = {
            key: escape(str(getattr(self, key) or ""))
            for key in (
                "invoice_number",
                "order_id",
                "order_date",
                "payment_type",
                "customer_name",
                "customer_phone",
                "customer_address",
                "shop_name",
                "seller_phone",
                "seller_address",
                "note",
            )
        }
        return _TEMPLATE.substitute(values, order_items=self._rows(), sub_total=self._money(self.sub_total))
