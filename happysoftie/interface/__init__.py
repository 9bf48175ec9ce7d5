"""Mini README: HTTP interface for the bookkeeping ledger.

Exports the FastAPI application factory that serves the ledger, dashboard
and reporting data as JSON, plus the CSV export download.
"""

from .web_app import build_store, create_application

__all__ = ["build_store", "create_application"]
