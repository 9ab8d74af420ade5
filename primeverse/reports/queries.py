"""Monitoring and admin queries over the payments table.

All functions take an open sync Connection; use ``run_sync`` from async
code. Date bucketing is dialect-aware: PostgreSQL uses ``date()`` and
``date_trunc``, SQLite uses ``date()`` and ``strftime``.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Date, DateTime, Numeric, desc, func, select
from sqlalchemy.engine import Connection

from primeverse.logging_config import get_logger
from primeverse.records.service import record_metric
from primeverse.reports.models import (
    DailyRevenue,
    DuplicateTransaction,
    HourlyTrend,
    PaymentRow,
    PaymentStatistics,
    ProgramRevenue,
    RevenueTotals,
)
from primeverse.schema.payments import payments

logger = get_logger(name=__name__)


def _revenue(column=payments.c.amount):
    return func.coalesce(func.sum(column), 0, type_=Numeric(12, 2))


def _day_of():
    return func.date(payments.c.created_at, type_=Date)


def _hour_of(connection: Connection):
    if connection.dialect.name == "sqlite":
        return func.strftime("%Y-%m-%d %H:00:00", payments.c.created_at, type_=DateTime)
    return func.date_trunc("hour", payments.c.created_at, type_=DateTime(timezone=True))


def list_payments(
    connection: Connection,
    program: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[PaymentRow]:
    """All payments newest first, optionally for one program."""
    stmt = select(payments).order_by(payments.c.created_at.desc(), payments.c.id.desc())
    if program is not None:
        stmt = stmt.where(payments.c.program == program)
    if limit is not None:
        stmt = stmt.limit(limit)
    return [PaymentRow(**row._mapping) for row in connection.execute(stmt)]


def revenue_totals(connection: Connection) -> RevenueTotals:
    row = connection.execute(
        select(
            func.count().label("total_payments"),
            _revenue().label("total_revenue"),
        ).select_from(payments)
    ).one()
    return RevenueTotals(**row._mapping)


def payments_on(connection: Connection, day: Optional[date] = None) -> List[PaymentRow]:
    """Payments created on a calendar day, today (UTC) when no day is given.

    The day is taken from the stored timestamp as the database sees it:
    UTC on SQLite, the session time zone on PostgreSQL.
    """
    day = day or datetime.now(timezone.utc).date()
    stmt = (
        select(payments)
        .where(_day_of() == day)
        .order_by(payments.c.created_at.desc(), payments.c.id.desc())
    )
    return [PaymentRow(**row._mapping) for row in connection.execute(stmt)]


def revenue_by_program(connection: Connection) -> List[ProgramRevenue]:
    stmt = (
        select(
            payments.c.program,
            func.count().label("transaction_count"),
            _revenue().label("total_revenue"),
        )
        .group_by(payments.c.program)
        .order_by(desc("total_revenue"), payments.c.program)
    )
    return [ProgramRevenue(**row._mapping) for row in connection.execute(stmt)]


def daily_revenue(connection: Connection, limit: int = 30) -> List[DailyRevenue]:
    """Per-day transaction count and revenue, newest day first."""
    day = _day_of().label("date")
    stmt = (
        select(
            day,
            func.count().label("transactions"),
            _revenue().label("revenue"),
        )
        .group_by(day)
        .order_by(desc("date"))
        .limit(limit)
    )
    return [DailyRevenue(**row._mapping) for row in connection.execute(stmt)]


def hourly_trend(connection: Connection, limit: int = 24) -> List[HourlyTrend]:
    """Per-hour payment count and total, newest hour first."""
    hour = _hour_of(connection).label("hour")
    stmt = (
        select(
            hour,
            func.count().label("count"),
            _revenue().label("total"),
        )
        .group_by(hour)
        .order_by(desc("hour"))
        .limit(limit)
    )
    return [HourlyTrend(**row._mapping) for row in connection.execute(stmt)]


def duplicate_transactions(connection: Connection) -> List[DuplicateTransaction]:
    """Transaction ids stored more than once.

    Always empty while the unique constraint holds; kept as a fraud check
    for databases created without it.
    """
    stmt = (
        select(
            payments.c.transaction_id,
            func.count().label("duplicates"),
        )
        .group_by(payments.c.transaction_id)
        .having(func.count() > 1)
    )
    return [DuplicateTransaction(**row._mapping) for row in connection.execute(stmt)]


def recent_payments(connection: Connection, days: int = 7) -> List[PaymentRow]:
    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    stmt = (
        select(payments)
        .where(payments.c.created_at > cutoff)
        .order_by(payments.c.created_at.desc(), payments.c.id.desc())
    )
    return [PaymentRow(**row._mapping) for row in connection.execute(stmt)]


def payment_statistics(connection: Connection) -> PaymentStatistics:
    row = connection.execute(
        select(
            func.count().label("total_payments"),
            _revenue().label("total_revenue"),
            func.avg(payments.c.amount, type_=Numeric(12, 2)).label("avg_amount"),
            func.min(payments.c.amount).label("min_amount"),
            func.max(payments.c.amount).label("max_amount"),
        ).select_from(payments)
    ).one()
    return PaymentStatistics(**row._mapping)


def revenue_for_day(connection: Connection, day: date) -> Decimal:
    """Sum of amounts created on a calendar day; 0 when nothing was paid."""
    return connection.execute(
        select(_revenue()).where(_day_of() == day)
    ).scalar_one()


def payment_count_for_day(connection: Connection, day: date) -> int:
    return connection.execute(
        select(func.count()).select_from(payments).where(_day_of() == day)
    ).scalar_one()


def total_customers(connection: Connection) -> int:
    """Distinct payer emails."""
    return connection.execute(
        select(func.count(func.distinct(payments.c.email)))
    ).scalar_one()


def snapshot_daily_stats(connection: Connection, day: Optional[date] = None) -> dict:
    """Write the day's revenue, payment count and customer total into stats.

    Each call appends new rows; the stats table keeps no uniqueness per
    (metric, date).
    """
    day = day or datetime.now(timezone.utc).date()
    metrics = {
        "daily_revenue": revenue_for_day(connection, day),
        "daily_payments": Decimal(payment_count_for_day(connection, day)),
        "total_customers": Decimal(total_customers(connection)),
    }
    for name, value in metrics.items():
        record_metric(connection, name, value, day)

    logger.info("Stats snapshot for {}: {}", day.isoformat(), metrics)
    return metrics
