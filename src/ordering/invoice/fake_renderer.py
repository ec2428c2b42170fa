"""Fake PDF renderer — records rendered documents for testing."""

from uuid import uuid4

from ordering.invoice.port import PdfRenderer


class FakePdfRenderer(PdfRenderer):
    def __init__(self):
        self.rendered: list[str] = []
        self.should_succeed = True

    def configure(self, should_succeed: bool = True):
        self.should_succeed = should_succeed

    def render_to_pdf(self, html: str) -> str | None:
        self.rendered.append(html)
        if not self.should_succeed:
            return None
        return f"https://files.example.com/invoices/{uuid4().hex[:12]}.pdf"

    def reset(self):
        self.rendered.clear()
        self.should_succeed = True
