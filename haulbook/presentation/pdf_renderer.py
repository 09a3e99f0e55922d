"""Mini README: Render laid-out reports to PDF with reportlab.

Structure:
    * PdfReportRenderer - draws a ``ReportDocument`` onto A4 canvas pages.
    * default_report_filename - dated download name for a report.

Positions in the layout are millimetres measured from the top of the page;
reportlab measures points from the bottom, so the renderer flips the y axis
while drawing.
"""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..logging_utils import get_logger
from .report_layout import ReportDocument

LOGGER = get_logger(__name__)


def default_report_filename(generated_at: datetime) -> str:
    return f"hassan-accounts-{generated_at.date().isoformat()}.pdf"


class PdfReportRenderer:
    """Draw report documents as PDF bytes or files."""

    def __init__(self, font_name: str = "Helvetica") -> None:
        self.font_name = font_name

    def render(self, document: ReportDocument) -> bytes:
        """Return the PDF bytes for ``document``."""

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(document.title)
        _, page_height = A4
        for page in document.pages:
            for line in page.lines:
                pdf.setFont(self.font_name, line.font_size)
                x = line.x * mm
                y = page_height - line.y * mm
                if line.align == "center":
                    pdf.drawCentredString(x, y, line.text)
                else:
                    pdf.drawString(x, y, line.text)
            pdf.showPage()
        pdf.save()
        LOGGER.info("Rendered PDF report with %s pages", document.page_count)
        return buffer.getvalue()

    def write(self, document: ReportDocument, destination: Path) -> Path:
        """Render ``document`` and write it to ``destination``."""

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.render(document))
        LOGGER.info("Report written to %s", destination)
        return destination
