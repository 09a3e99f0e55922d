"""Mini README: FastAPI-powered bookkeeping service for Haulbook.

Structure:
    * create_application - application factory wiring routes and templates.
    * Record routes - CRUD over customer deliveries and expenses.
    * Dashboard form routes - HTML form posts that redirect back to the dashboard.
    * Reporting routes - summary, daily operations tree and report exports.

The factory builds one ``RecordStore`` (unless a caller hands one in) and
shares it with every route through closures, so tests can inject a store with
a fixed clock. Unknown identifiers are mapped to 404 responses and invalid
payloads to 400 responses carrying the validation errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..aggregation import LedgerAggregator, serialise_amount
from ..configuration import HaulbookSettings, get_settings
from ..logging_utils import get_logger
from ..presentation import (
    DailyOperationsView,
    PdfReportRenderer,
    ReportLayout,
    default_report_filename,
    format_amount,
    recent_expenses,
)
from ..records import RecordKind, RecordStore
from .schemas import CustomerCreate, CustomerUpdate, ExpenseCreate, ExpenseUpdate

LOGGER = get_logger(__name__)


def create_application(
    store: Optional[RecordStore] = None,
    settings: Optional[HaulbookSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    app = FastAPI(title="Haulbook", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["amount"] = lambda value: format_amount(value, settings.currency_code)

    if store is None:
        store = RecordStore()
        if settings.seed_demo_data:
            store.seed_demo_records()
    aggregator = LedgerAggregator(store)
    daily_view = DailyOperationsView()
    renderer = PdfReportRenderer()
    app.state.store = store

    def _create(kind: RecordKind, fields: dict) -> JSONResponse:
        try:
            record = store.create(kind, fields)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(record.as_dict(), status_code=201)

    def _update(kind: RecordKind, record_id: int, fields: dict, label: str) -> JSONResponse:
        try:
            record = store.update(kind, record_id, fields)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if record is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return JSONResponse(record.as_dict())

    def _delete(kind: RecordKind, record_id: int, label: str) -> JSONResponse:
        if not store.delete(kind, record_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return JSONResponse({"message": f"{label} deleted successfully"})

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, error: RequestValidationError) -> JSONResponse:
        """Report schema violations as 400 responses listing each error."""

        LOGGER.warning("Rejected request to %s: %s", request.url.path, error.errors())
        return JSONResponse(
            {"message": "Invalid request data", "errors": jsonable_encoder(error.errors())},
            status_code=400,
        )

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the dashboard with totals, recent days and recent expenses."""

        summary = aggregator.compute_summary()
        days = daily_view.build(aggregator.compute_date_groups(limit=settings.recent_day_limit))
        LOGGER.debug("Rendering dashboard with %s day nodes", len(days))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "summary": summary,
                "days": days,
                "expenses": recent_expenses(store.list_all(RecordKind.EXPENSES)),
            },
        )

    @app.post("/days/toggle")
    async def toggle_day_form(date_key: str = Form(...)) -> RedirectResponse:
        """Flip a day on the dashboard and send the browser back to it."""

        daily_view.toggle(date_key)
        return RedirectResponse("/", status_code=303)

    @app.post("/customers/{record_id}/edit")
    async def edit_customer_form(
        record_id: int,
        name: Optional[str] = Form(None),
        goods_type: Optional[str] = Form(None),
        car_count: Optional[int] = Form(None),
        amount: Optional[str] = Form(None),
        payment_status: Optional[str] = Form(None),
    ) -> RedirectResponse:
        """Apply the fields submitted from a dashboard entry's edit form."""

        submitted = {
            "name": name,
            "goods_type": goods_type,
            "car_count": car_count,
            "amount": amount,
            "payment_status": payment_status,
        }
        fields = {key: value for key, value in submitted.items() if value is not None}
        _update(RecordKind.CUSTOMERS, record_id, fields, "Customer")
        return RedirectResponse("/", status_code=303)

    @app.post("/customers/{record_id}/delete")
    async def delete_customer_form(record_id: int) -> RedirectResponse:
        _delete(RecordKind.CUSTOMERS, record_id, "Customer")
        return RedirectResponse("/", status_code=303)

    @app.get("/api/customers")
    async def list_customers() -> JSONResponse:
        customers = store.list_all(RecordKind.CUSTOMERS)
        return JSONResponse([customer.as_dict() for customer in customers])

    @app.post("/api/customers")
    async def create_customer(payload: CustomerCreate) -> JSONResponse:
        return _create(RecordKind.CUSTOMERS, payload.model_dump())

    @app.put("/api/customers/{record_id}")
    async def update_customer(record_id: int, payload: CustomerUpdate) -> JSONResponse:
        return _update(
            RecordKind.CUSTOMERS, record_id, payload.model_dump(exclude_unset=True), "Customer"
        )

    @app.delete("/api/customers/{record_id}")
    async def delete_customer(record_id: int) -> JSONResponse:
        return _delete(RecordKind.CUSTOMERS, record_id, "Customer")

    @app.get("/api/expenses")
    async def list_expenses() -> JSONResponse:
        expenses = store.list_all(RecordKind.EXPENSES)
        return JSONResponse([expense.as_dict() for expense in expenses])

    @app.post("/api/expenses")
    async def create_expense(payload: ExpenseCreate) -> JSONResponse:
        return _create(RecordKind.EXPENSES, payload.model_dump())

    @app.put("/api/expenses/{record_id}")
    async def update_expense(record_id: int, payload: ExpenseUpdate) -> JSONResponse:
        return _update(
            RecordKind.EXPENSES, record_id, payload.model_dump(exclude_unset=True), "Expense"
        )

    @app.delete("/api/expenses/{record_id}")
    async def delete_expense(record_id: int) -> JSONResponse:
        return _delete(RecordKind.EXPENSES, record_id, "Expense")

    @app.get("/api/summary")
    async def summary() -> JSONResponse:
        return JSONResponse(aggregator.compute_summary().as_dict())

    @app.get("/api/daily-operations")
    async def daily_operations() -> JSONResponse:
        """Return the most recent days as an expand/collapse tree."""

        date_groups = aggregator.compute_date_groups(limit=settings.recent_day_limit)
        days = daily_view.build(date_groups)
        return JSONResponse({"days": [day.as_dict() for day in days]})

    @app.post("/api/daily-operations/toggle")
    async def toggle_day(date_key: str) -> JSONResponse:
        expanded = daily_view.toggle(date_key)
        return JSONResponse({"date_key": date_key, "expanded": expanded})

    @app.delete("/api/clear-all")
    async def clear_all() -> JSONResponse:
        store.reset_all()
        return JSONResponse({"message": "All data cleared successfully"})

    @app.post("/api/generate-pdf")
    async def generate_pdf_data() -> JSONResponse:
        """Return the report snapshot for client-side rendering."""

        return JSONResponse(aggregator.export_snapshot().as_dict())

    @app.get("/api/report.pdf")
    async def download_report() -> Response:
        """Render the full report with reportlab and return it as a download."""

        snapshot = aggregator.export_snapshot()
        layout = ReportLayout(title=settings.report_title, currency=settings.currency_code)
        document = layout.build(snapshot)
        filename = default_report_filename(snapshot.generated_at)
        LOGGER.info(
            "Serving report %s (net total %s)",
            filename,
            serialise_amount(snapshot.summary.net_total),
        )
        return Response(
            content=renderer.render(document),
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app
