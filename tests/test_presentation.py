"""Mini README: Tests for the dashboard tree, report layout and PDF renderer.

Structure:
    * Tree view tests - expansion state controls which days list their groups.
    * Layout tests - sections are written and long reports spill onto new pages.
    * Renderer tests - reportlab output is a PDF document on disk and in memory.
"""

from __future__ import annotations

from datetime import datetime

from haulbook.aggregation import LedgerAggregator
from haulbook.presentation import (
    DailyOperationsView,
    PdfReportRenderer,
    ReportLayout,
    format_amount,
    recent_expenses,
)
from haulbook.presentation.report_layout import PAGE_HEIGHT_MM
from haulbook.records import RecordKind, RecordStore


def build_store(customer_names, *, expenses=1) -> RecordStore:
    store = RecordStore(clock=lambda: datetime(2024, 5, 1, 9, 0))
    for name in customer_names:
        store.create(
            RecordKind.CUSTOMERS,
            {"name": name, "goods_type": "Cement", "car_count": 2, "amount": "1500", "payment_status": "paid"},
        )
    for index in range(expenses):
        store.create(RecordKind.EXPENSES, {"description": f"expense {index}", "amount": "30"})
    return store


def test_format_amount_uses_separators_and_currency() -> None:
    assert format_amount("1500") == "1,500.00 IQD"
    assert format_amount("99.5", currency="USD") == "99.50 USD"


def test_collapsed_days_hide_groups_until_toggled() -> None:
    store = build_store(["A", "B", "A"])
    date_groups = LedgerAggregator(store).compute_date_groups(limit=3)
    view = DailyOperationsView()

    collapsed = view.build(date_groups)[0]
    assert collapsed.expanded is False
    assert collapsed.groups == []
    assert collapsed.customer_count == 2
    assert collapsed.total_amount == "4500.00"

    assert view.toggle("01/05/2024") is True
    expanded = view.build(date_groups)[0]
    assert [group.name for group in expanded.groups] == ["A", "B"]
    entry = expanded.groups[0].entries[0]
    assert entry.resource_path == f"/api/customers/{entry.record_id}"
    assert entry.edit_path == f"/customers/{entry.record_id}/edit"
    assert entry.delete_path == f"/customers/{entry.record_id}/delete"
    assert expanded.groups[0].entry_count == 2

    assert view.toggle("01/05/2024") is False
    assert view.expanded == set()


def test_recent_expenses_limits_to_newest() -> None:
    store = build_store([], expenses=5)

    latest = recent_expenses(store.list_all(RecordKind.EXPENSES))

    assert [expense.id for expense in latest] == [5, 4, 3]


def test_layout_writes_all_sections_on_one_page() -> None:
    store = build_store(["A"])
    snapshot = LedgerAggregator(store).export_snapshot(generated_at=datetime(2024, 5, 2, 10, 0))

    document = ReportLayout(title="Ops Report").build(snapshot)
    text = document.all_text()

    assert document.page_count == 1
    assert text[0] == "Ops Report"
    assert "Report Date: 02/05/2024" in text
    assert {"Operations:", "Expenses:", "Summary:"} <= set(text)
    assert "   Goods Type: Cement" in text
    assert "Net Total: 1,470.00 IQD" in text


def test_layout_starts_new_page_when_cursor_passes_threshold() -> None:
    """Four group blocks fill the first page; the fifth opens a new one."""

    store = build_store(["A", "B", "C", "D", "E", "F"])
    snapshot = LedgerAggregator(store).export_snapshot()

    document = ReportLayout().build(snapshot)

    assert document.page_count == 2
    second_page = document.pages[1]
    assert second_page.lines[0].y == ReportLayout.page_top
    assert second_page.lines[0].text.startswith("5. ")
    assert all(line.y < PAGE_HEIGHT_MM for page in document.pages for line in page.lines)


def store_with_large_group(entry_count: int) -> RecordStore:
    """One customer with many entries, listed after three single-entry customers."""

    moments = iter(datetime(2024, 5, 1, 8, minute) for minute in range(entry_count + 3))
    store = RecordStore(clock=lambda: next(moments))
    for _ in range(entry_count):
        store.create(
            RecordKind.CUSTOMERS,
            {"name": "Z", "goods_type": "Gravel", "car_count": 1, "amount": "10", "payment_status": "paid"},
        )
    for name in ("A", "B", "C"):
        store.create(
            RecordKind.CUSTOMERS,
            {"name": name, "goods_type": "Cement", "car_count": 1, "amount": "20", "payment_status": "paid"},
        )
    return store


def test_layout_moves_group_that_would_overflow_to_next_page() -> None:
    """A multi-entry block near the threshold starts a new page instead of running off it."""

    document = ReportLayout().build(LedgerAggregator(store_with_large_group(12)).export_snapshot())
    text = document.all_text()

    assert all(line.y < PAGE_HEIGHT_MM for page in document.pages for line in page.lines)
    assert all(line.y <= ReportLayout.page_bottom for page in document.pages for line in page.lines)
    assert document.pages[1].lines[0].text == "4. Z"
    assert document.pages[1].lines[0].y == ReportLayout.page_top
    assert sum(1 for line in text if line.lstrip().startswith("Entry ")) == 15


def test_layout_splits_group_taller_than_a_page() -> None:
    document = ReportLayout().build(LedgerAggregator(store_with_large_group(40)).export_snapshot())
    entry_lines = [
        line for page in document.pages for line in page.lines if line.text.lstrip().startswith("Entry ")
    ]

    assert len(entry_lines) == 43
    assert document.page_count >= 3
    assert all(line.y <= ReportLayout.page_bottom for page in document.pages for line in page.lines)
    assert entry_lines[-1].text.lstrip().startswith("Entry 40:")


def test_layout_numbers_groups_across_days() -> None:
    moments = iter([datetime(2024, 5, 1, 9, 0), datetime(2024, 5, 2, 9, 0)])
    store = RecordStore(clock=lambda: next(moments))
    store.create(
        RecordKind.CUSTOMERS,
        {"name": "A", "goods_type": "X", "car_count": 1, "amount": "10", "payment_status": "unpaid"},
    )
    store.create(
        RecordKind.CUSTOMERS,
        {"name": "B", "goods_type": "Y", "car_count": 1, "amount": "20", "payment_status": "paid"},
    )
    snapshot = LedgerAggregator(store).export_snapshot()

    text = ReportLayout().build(snapshot).all_text()

    assert text.index("1. B") < text.index("2. A")
    assert any(line.endswith("(Unpaid)") for line in text)


def test_pdf_renderer_produces_pdf_bytes_and_files(tmp_path) -> None:
    store = build_store(["A", "B"])
    document = ReportLayout().build(LedgerAggregator(store).export_snapshot())
    renderer = PdfReportRenderer()

    payload = renderer.render(document)
    assert payload.startswith(b"%PDF")

    destination = renderer.write(document, tmp_path / "reports" / "report.pdf")
    assert destination.exists()
    assert destination.read_bytes().startswith(b"%PDF")
