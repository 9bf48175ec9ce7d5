"""Mini README: Export helpers for the reporting view.

Exposes the CSV projector that turns a filtered ledger snapshot into a
download-ready table.
"""

from .csv_exporter import CSV_HEADER, ExportRow, export_filename, project_rows, render_csv, write_csv

__all__ = ["CSV_HEADER", "ExportRow", "export_filename", "project_rows", "render_csv", "write_csv"]
