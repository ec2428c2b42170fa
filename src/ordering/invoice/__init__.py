"""PDF renderer factory.

Uses Report Forge when REPORT_FORGE_URL is set, else the fake renderer.
"""

import os

from ordering.invoice.fake_renderer import FakePdfRenderer
from ordering.invoice.port import PdfRenderer

_current_renderer: PdfRenderer | None = None


def get_renderer() -> PdfRenderer:
    global _current_renderer
    if _current_renderer is None:
        url = os.getenv("REPORT_FORGE_URL")
        if url:
            from ordering.invoice.report_forge import ReportForgeRenderer

            _current_renderer = ReportForgeRenderer(url, timeout=float(os.getenv("RENDER_TIMEOUT_SECONDS", "30")))
        else:
            _current_renderer = FakePdfRenderer()
    return _current_renderer


def set_renderer(renderer: PdfRenderer) -> None:
    global _current_renderer
    _current_renderer = renderer


def reset_renderer() -> None:
    global _current_renderer
    _current_renderer = None
