"""Mini README: Derived figures for the dashboard and reporting views.

``metrics`` computes headline numbers from a snapshot while ``aggregation``
buckets transactions by month, day and category. Both modules are pure
projections: they never touch the store, only the snapshot passed in.
"""

from .aggregation import (
    CategoryTotal,
    DailyTotals,
    MonthBucket,
    RangeReport,
    build_report,
    category_color,
    daily_series,
    default_report_range,
    filter_by_date_range,
    group_expenses_by_category,
    month_buckets,
    monthly_series,
)
from .metrics import (
    FinancialSummary,
    average_expense,
    average_sale,
    profit,
    profit_margin,
    profit_status,
    summarise,
    total_expenses,
    total_sales,
    transaction_count,
)

__all__ = [
    "CategoryTotal",
    "DailyTotals",
    "FinancialSummary",
    "MonthBucket",
    "RangeReport",
    "average_expense",
    "average_sale",
    "build_report",
    "category_color",
    "daily_series",
    "default_report_range",
    "filter_by_date_range",
    "group_expenses_by_category",
    "month_buckets",
    "monthly_series",
    "profit",
    "profit_margin",
    "profit_status",
    "summarise",
    "total_expenses",
    "total_sales",
    "transaction_count",
]
