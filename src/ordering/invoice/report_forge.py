"""Report Forge adapter — HTML to PDF over HTTP.

    POST REPORT_FORGE_URL {"content": <html>, "image": true}
      -> {"code": 200, "data": <pdf url>}
"""

import requests
import structlog

from ordering.invoice.port import PdfRenderer

logger = structlog.get_logger(__name__)

DEFAULT_REPORT_FORGE_URL = "http://localhost:3000/api/site-to-pdf"


class ReportForgeRenderer(PdfRenderer):
    def __init__(self, url: str = DEFAULT_REPORT_FORGE_URL, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    def render_to_pdf(self, html: str) -> str | None:
        response = requests.post(self.url, json={"content": html, "image": True}, timeout=self.timeout)
        response.raise_for_status()
        body = response.json()
        if body.get("code") != 200 or not body.get("data"):
            logger.warning("Report Forge did not return a document", code=body.get("code"))
            return None
        return body["data"]
