"""Mini README: FastAPI JSON service over the bookkeeping ledger.

Structure:
    * SalePayload / ExpensePayload - request bodies for create and edit.
    * build_store - construct and restore a store from settings.
    * create_application - application factory wiring routes to a store.

The factory receives the store explicitly (or builds one from settings), so
tests and embedding hosts can inject an in-memory adapter. Routes run on the
event loop thread, which serialises store mutations. Unknown ids on edit or
delete are reported as 404 here even though the store itself treats them as
no-ops. Persistence failures surface as 503 while the in-memory change stays
applied.
Payload dates keep only the calendar day, and known expense categories are
stored under their canonical casing.
"""

from __future__ import annotations

import datetime as dt
from datetime import date
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, field_validator

from ..configuration import HappySoftieSettings, get_settings
from ..export import export_filename, project_rows, render_csv
from ..ledger import Expense, ExpenseCategory, Sale, TransactionStore, parse_calendar_day
from ..logging_utils import configure_root_logger, get_logger
from ..persistence import FileSystemAdapter, PersistenceError
from ..reporting import (
    build_report,
    category_color,
    default_report_range,
    group_expenses_by_category,
    monthly_series,
    summarise,
)

LOGGER = get_logger(__name__)


class SalePayload(BaseModel):
    date: dt.date
    customer: str
    description: str
    amount: float

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: object) -> dt.date:
        return parse_calendar_day(value)


class ExpensePayload(BaseModel):
    date: dt.date
    category: Optional[str] = None
    description: str
    amount: float

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: object) -> dt.date:
        return parse_calendar_day(value)

    @field_validator("category", mode="before")
    @classmethod
    def _known_category_casing(cls, value: object) -> object:
        """Map known categories to their canonical label and keep custom ones."""

        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return ExpenseCategory.from_str(value).value
        except ValueError:
            return value


def build_store(settings: HappySoftieSettings) -> TransactionStore:
    """Create a file-backed store and load the persisted snapshot."""

    adapter = FileSystemAdapter(settings.data_directory, key=settings.storage_key)
    store = TransactionStore(adapter)
    store.restore()
    return store


def create_application(
    store: Optional[TransactionStore] = None,
    settings: Optional[HappySoftieSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes bound to ``store``."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    if store is None:
        store = build_store(settings)

    app = FastAPI(title="Happy Softie Bookkeeping", version="0.1.0")
    app.state.store = store
    app.state.settings = settings

    def resolve_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
        default_start, default_end = default_report_range(window_days=settings.report_window_days)
        return start or default_start, end or default_end

    @app.exception_handler(PersistenceError)
    async def persistence_failed(request: Request, error: PersistenceError) -> JSONResponse:
        LOGGER.error("Persistence failure during %s %s: %s", request.method, request.url.path, error)
        return JSONResponse(status_code=503, content={"detail": str(error)})

    @app.get("/sales")
    async def list_sales() -> JSONResponse:
        return JSONResponse({"sales": [sale.as_dict() for sale in store.state.sales]})

    @app.post("/sales", status_code=201)
    async def create_sale(payload: SalePayload) -> JSONResponse:
        sale = store.add_sale(
            occurred_on=payload.date,
            customer=payload.customer,
            description=payload.description,
            amount=payload.amount,
        )
        return JSONResponse(sale.as_dict(), status_code=201)

    @app.get("/sales/{transaction_id}")
    async def read_sale(transaction_id: str) -> JSONResponse:
        sale = store.get_sale(transaction_id)
        if sale is None:
            raise HTTPException(status_code=404, detail=f"Sale {transaction_id} not found")
        return JSONResponse(sale.as_dict())

    @app.put("/sales/{transaction_id}")
    async def update_sale(transaction_id: str, payload: SalePayload) -> JSONResponse:
        sale = Sale(
            transaction_id=transaction_id,
            occurred_on=payload.date,
            customer=payload.customer,
            description=payload.description,
            amount=payload.amount,
        )
        if not store.edit_sale(sale):
            raise HTTPException(status_code=404, detail=f"Sale {transaction_id} not found")
        return JSONResponse(sale.as_dict())

    @app.delete("/sales/{transaction_id}")
    async def remove_sale(transaction_id: str) -> JSONResponse:
        if not store.delete_sale(transaction_id):
            raise HTTPException(status_code=404, detail=f"Sale {transaction_id} not found")
        return JSONResponse({"deleted": transaction_id})

    @app.get("/expenses")
    async def list_expenses() -> JSONResponse:
        return JSONResponse({"expenses": [expense.as_dict() for expense in store.state.expenses]})

    @app.post("/expenses", status_code=201)
    async def create_expense(payload: ExpensePayload) -> JSONResponse:
        expense = store.add_expense(
            occurred_on=payload.date,
            category=payload.category,
            description=payload.description,
            amount=payload.amount,
        )
        return JSONResponse(expense.as_dict(), status_code=201)

    @app.get("/expenses/{transaction_id}")
    async def read_expense(transaction_id: str) -> JSONResponse:
        expense = store.get_expense(transaction_id)
        if expense is None:
            raise HTTPException(status_code=404, detail=f"Expense {transaction_id} not found")
        return JSONResponse(expense.as_dict())

    @app.put("/expenses/{transaction_id}")
    async def update_expense(transaction_id: str, payload: ExpensePayload) -> JSONResponse:
        expense = Expense(
            transaction_id=transaction_id,
            occurred_on=payload.date,
            category=payload.category,
            description=payload.description,
            amount=payload.amount,
        )
        if not store.edit_expense(expense):
            raise HTTPException(status_code=404, detail=f"Expense {transaction_id} not found")
        return JSONResponse(expense.as_dict())

    @app.delete("/expenses/{transaction_id}")
    async def remove_expense(transaction_id: str) -> JSONResponse:
        if not store.delete_expense(transaction_id):
            raise HTTPException(status_code=404, detail=f"Expense {transaction_id} not found")
        return JSONResponse({"deleted": transaction_id})

    @app.get("/categories")
    async def categories() -> JSONResponse:
        payload = [
            {
                "category": category.value,
                "color": category_color(
                    category.value, settings.category_colors, settings.default_category_color
                ),
            }
            for category in ExpenseCategory
        ]
        return JSONResponse({"categories": payload})

    @app.get("/dashboard")
    async def dashboard() -> JSONResponse:
        """Return headline metrics, the monthly series and the category split."""

        snapshot = store.state
        summary = summarise(snapshot)
        months = monthly_series(snapshot, settings.dashboard_months)
        breakdown = group_expenses_by_category(
            snapshot.expenses, settings.category_colors, settings.default_category_color
        )
        LOGGER.debug(
            "Dashboard metrics -> sales: %.2f expenses: %.2f margin: %.1f",
            summary.total_sales,
            summary.total_expenses,
            summary.profit_margin,
        )
        return JSONResponse(
            {
                "summary": summary.as_dict(),
                "monthly": [bucket.as_dict() for bucket in months],
                "categories": [entry.as_dict() for entry in breakdown],
            }
        )

    @app.get("/reports")
    async def report(start: Optional[date] = None, end: Optional[date] = None) -> JSONResponse:
        range_start, range_end = resolve_range(start, end)
        result = build_report(
            store.state,
            range_start,
            range_end,
            settings.category_colors,
            settings.default_category_color,
        )
        return JSONResponse(result.as_dict())

    @app.get("/reports/export")
    async def export_report(start: Optional[date] = None, end: Optional[date] = None) -> Response:
        range_start, range_end = resolve_range(start, end)
        result = build_report(store.state, range_start, range_end)
        rows = project_rows(result.transactions)
        filename = export_filename(range_start, range_end)
        LOGGER.info("Exporting %s rows as %s", len(rows), filename)
        return Response(
            content=render_csv(rows),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app
