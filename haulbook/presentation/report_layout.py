"""Mini README: Paginated layout of the operations report.

Structure:
    * TextLine - a positioned string on a page (millimetres from the top-left).
    * ReportPage - the lines placed on one page.
    * ReportDocument - ordered pages plus the document title.
    * ReportLayout - walks a ``ReportSnapshot`` and places every line.

The layout is independent of any PDF library. It advances a vertical cursor
down an A4 page as it emits the operations, expenses and summary sections,
and opens a new page whenever the cursor has passed the configured threshold
or a customer block would run past the bottom margin. ``PdfReportRenderer``
turns the result into a PDF.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..aggregation import NameGroup, ReportSnapshot, format_date_key
from ..logging_utils import get_logger
from .formatting import format_amount, format_payment_label

LOGGER = get_logger(__name__)

PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0


@dataclass(slots=True)
class TextLine:
    x: float
    y: float
    text: str
    font_size: int = 12
    align: str = "left"


@dataclass(slots=True)
class ReportPage:
    lines: List[TextLine] = field(default_factory=list)


@dataclass(slots=True)
class ReportDocument:
    title: str
    pages: List[ReportPage]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def all_text(self) -> List[str]:
        """Return every line of text in reading order."""

        return [line.text for page in self.pages for line in page.lines]


class ReportLayout:
    """Lay out a report snapshot across as many pages as it needs."""

    left_margin = 20.0
    entry_margin = 25.0
    first_cursor = 50.0
    page_top = 20.0
    section_threshold = 240.0
    expense_threshold = 250.0
    page_bottom = 280.0

    def __init__(
        self,
        title: str = "Hassan Accounts - Operations Report",
        currency: str = "IQD",
    ) -> None:
        self.title = title
        self.currency = currency
        self._pages: List[ReportPage] = []
        self._cursor = self.first_cursor

    def build(self, snapshot: ReportSnapshot) -> ReportDocument:
        """Produce the full document for ``snapshot``."""

        self._pages = [ReportPage()]
        self._cursor = self.first_cursor
        self._write_header(snapshot)
        self._write_operations(snapshot)
        self._write_expenses(snapshot)
        self._write_summary(snapshot)
        LOGGER.debug("Report laid out across %s pages", len(self._pages))
        return ReportDocument(title=self.title, pages=self._pages)

    def _emit(self, x: float, y: float, text: str, font_size: int = 12, align: str = "left") -> None:
        self._pages[-1].lines.append(TextLine(x=x, y=y, text=text, font_size=font_size, align=align))

    def _new_page(self) -> None:
        self._pages.append(ReportPage())
        self._cursor = self.page_top

    def _break_if_past(self, threshold: float) -> None:
        if self._cursor > threshold:
            self._new_page()

    def _write_header(self, snapshot: ReportSnapshot) -> None:
        centre = PAGE_WIDTH_MM / 2
        self._emit(centre, 20, self.title, font_size=20, align="center")
        self._emit(
            centre,
            30,
            f"Report Date: {format_date_key(snapshot.generated_at)}",
            align="center",
        )

    def _write_operations(self, snapshot: ReportSnapshot) -> None:
        self._emit(self.left_margin, self._cursor, "Operations:", font_size=16)
        self._cursor += 15

        index = 0
        for date_group in snapshot.date_groups:
            self._break_if_past(self.section_threshold)
            self._emit(
                self.left_margin,
                self._cursor,
                f"Date: {date_group.date_key} ({format_amount(date_group.total_amount, self.currency)})",
                font_size=14,
            )
            self._cursor += 10
            for group in date_group.groups:
                index += 1
                self._write_group(index, group)

    def _write_group(self, index: int, group: NameGroup) -> None:
        block_height = 40 + len(group.entries) * 8
        fits = self._cursor + block_height <= self.page_bottom
        if self._cursor > self.section_threshold or (not fits and self._cursor > self.page_top):
            self._new_page()

        top = self._cursor
        self._emit(self.left_margin, top, f"{index}. {group.name}")
        self._emit(self.left_margin, top + 8, f"   Goods Type: {', '.join(group.goods_types)}")
        self._emit(self.left_margin, top + 16, f"   Total Cars: {group.total_cars}")
        self._emit(
            self.left_margin,
            top + 24,
            f"   Total Amount: {format_amount(group.total_amount, self.currency)}",
        )
        self._cursor = top + 32
        for entry_index, entry in enumerate(group.entries):
            # Groups taller than a page continue their entries on the next one.
            if self._cursor > self.page_bottom:
                self._new_page()
            self._emit(
                self.entry_margin,
                self._cursor,
                f"     Entry {entry_index + 1}: {entry.car_count} cars - "
                f"{format_amount(entry.amount, self.currency)} ({format_payment_label(entry.is_paid)})",
                font_size=10,
            )
            self._cursor += 8
        self._cursor += 8

    def _write_expenses(self, snapshot: ReportSnapshot) -> None:
        self._cursor += 10
        self._break_if_past(self.section_threshold)
        self._emit(self.left_margin, self._cursor, "Expenses:", font_size=16)
        self._cursor += 15

        for index, expense in enumerate(snapshot.expenses, start=1):
            self._break_if_past(self.expense_threshold)
            self._emit(
                self.left_margin,
                self._cursor,
                f"{index}. {expense.description}: {format_amount(expense.amount, self.currency)}",
            )
            self._cursor += 12

    def _write_summary(self, snapshot: ReportSnapshot) -> None:
        self._cursor += 15
        self._break_if_past(self.section_threshold)
        self._emit(self.left_margin, self._cursor, "Summary:", font_size=16)
        self._cursor += 15

        summary = snapshot.summary
        rows = [
            f"Total Revenue: {format_amount(summary.total_revenue, self.currency)}",
            f"Total Expenses: {format_amount(summary.total_expenses, self.currency)}",
            f"Net Total: {format_amount(summary.net_total, self.currency)}",
            f"Total Cars: {summary.total_cars}",
        ]
        for offset, text in enumerate(rows):
            self._emit(self.left_margin, self._cursor + offset * 12, text)
        self._cursor += len(rows) * 12
