"""PDF render port — turns an HTML document into a hosted PDF."""

from abc import ABC, abstractmethod


class PdfRenderer(ABC):
    @abstractmethod
    def render_to_pdf(self, html: str) -> str | None:
        """Render ``html`` and return the URL of the PDF, or None on failure."""
        ...
