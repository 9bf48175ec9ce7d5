"""Mini README: Core package initializer for Happy Softie bookkeeping.

The package records sales and expenses in a persisted ledger and derives
totals, margins, monthly and daily trends, category breakdowns and CSV
exports from it. Sub-packages are imported explicitly by callers; this file
only re-exports the logger factory so it stays free of heavy dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
