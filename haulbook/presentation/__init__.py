"""Mini README: Presentation adapters for aggregated ledger data.

Exports the interactive day tree used by the dashboard, the paginated report
layout and its reportlab renderer, plus shared formatting helpers.
"""

from .formatting import format_amount, format_payment_label
from .pdf_renderer import PdfReportRenderer, default_report_filename
from .report_layout import ReportDocument, ReportLayout, ReportPage, TextLine
from .tree_view import DailyOperationsView, DayNode, EntryNode, GroupNode, recent_expenses

__all__ = [
    "DailyOperationsView",
    "DayNode",
    "EntryNode",
    "GroupNode",
    "PdfReportRenderer",
    "ReportDocument",
    "ReportLayout",
    "ReportPage",
    "TextLine",
    "default_report_filename",
    "format_amount",
    "format_payment_label",
    "recent_expenses",
]
