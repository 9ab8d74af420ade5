"""Monitoring and admin reports over recorded payments."""

from primeverse.reports.queries import (
    daily_revenue,
    duplicate_transactions,
    hourly_trend,
    list_payments,
    payment_statistics,
    payments_on,
    recent_payments,
    revenue_by_program,
    revenue_for_day,
    revenue_totals,
    snapshot_daily_stats,
    total_customers,
)

__all__ = [
    "daily_revenue",
    "duplicate_transactions",
    "hourly_trend",
    "list_payments",
    "payment_statistics",
    "payments_on",
    "recent_payments",
    "revenue_by_program",
    "revenue_for_day",
    "revenue_totals",
    "snapshot_daily_stats",
    "total_customers",
]
