"""Tests for the monitoring and admin report queries."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from primeverse.reports import queries
from primeverse.schema.payments import payments
from primeverse.schema.stats import stats


def _payment(transaction_id, program, amount, email, created_at):
    return {
        "program": program,
        "full_name": email.split("@")[0].title(),
        "email": email,
        "phone": "9876543210",
        "transaction_id": transaction_id,
        "amount": Decimal(amount),
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture
def sample_payments(conn):
    """Three payments over two days and two programs."""
    rows = [
        _payment("TXN-1", "PrimeStart", "5000", "asha@example.com",
                 datetime(2026, 10, 17, 9, 15, tzinfo=timezone.utc)),
        _payment("TXN-2", "PrimeStart", "7500", "ravi@example.com",
                 datetime(2026, 10, 17, 9, 45, tzinfo=timezone.utc)),
        _payment("TXN-3", "PrimeElite", "20000", "asha@example.com",
                 datetime(2026, 10, 18, 14, 5, tzinfo=timezone.utc)),
    ]
    conn.execute(payments.insert(), rows)
    return conn


class TestTotals:

    def test_total_revenue_of_two_payments(self, conn):
        conn.execute(payments.insert(), [
            _payment("A", "PrimeStart", "5000", "a@example.com", datetime(2026, 10, 1)),
            _payment("B", "PrimeStart", "7500", "b@example.com", datetime(2026, 10, 2)),
        ])

        totals = queries.revenue_totals(conn)

        assert totals.total_payments == 2
        assert totals.total_revenue == Decimal("12500")

    def test_empty_table(self, conn):
        totals = queries.revenue_totals(conn)
        stats_row = queries.payment_statistics(conn)

        assert totals.total_payments == 0
        assert totals.total_revenue == Decimal("0")
        assert stats_row.avg_amount is None
        assert stats_row.max_amount is None

    def test_payment_statistics(self, sample_payments):
        result = queries.payment_statistics(sample_payments)

        assert result.total_payments == 3
        assert result.total_revenue == Decimal("32500")
        assert result.min_amount == Decimal("5000")
        assert result.max_amount == Decimal("20000")
        assert result.avg_amount == Decimal("10833.33")

    def test_total_customers_counts_distinct_emails(self, sample_payments):
        assert queries.total_customers(sample_payments) == 2


class TestBreakdowns:

    def test_revenue_by_program(self, sample_payments):
        result = queries.revenue_by_program(sample_payments)

        assert [(r.program, r.transaction_count, r.total_revenue) for r in result] == [
            ("PrimeElite", 1, Decimal("20000")),
            ("PrimeStart", 2, Decimal("12500")),
        ]

    def test_daily_revenue_newest_first(self, sample_payments):
        result = queries.daily_revenue(sample_payments)

        assert [(r.date, r.transactions, r.revenue) for r in result] == [
            (date(2026, 10, 18), 1, Decimal("20000")),
            (date(2026, 10, 17), 2, Decimal("12500")),
        ]
        assert len(queries.daily_revenue(sample_payments, limit=1)) == 1

    def test_hourly_trend(self, sample_payments):
        result = queries.hourly_trend(sample_payments)

        assert [(r.hour.replace(tzinfo=None), r.count, r.total) for r in result] == [
            (datetime(2026, 10, 18, 14, 0), 1, Decimal("20000")),
            (datetime(2026, 10, 17, 9, 0), 2, Decimal("12500")),
        ]

    def test_revenue_for_day(self, sample_payments):
        assert queries.revenue_for_day(sample_payments, date(2026, 10, 17)) == Decimal("12500")
        assert queries.revenue_for_day(sample_payments, date(2026, 10, 16)) == Decimal("0")

    def test_no_duplicate_transactions(self, sample_payments):
        assert queries.duplicate_transactions(sample_payments) == []


class TestPaymentLists:

    def test_list_payments_newest_first(self, sample_payments):
        result = queries.list_payments(sample_payments)
        assert [p.transaction_id for p in result] == ["TXN-3", "TXN-2", "TXN-1"]

    def test_list_payments_by_program(self, sample_payments):
        result = queries.list_payments(sample_payments, program="PrimeStart", limit=10)

        assert [p.transaction_id for p in result] == ["TXN-2", "TXN-1"]
        assert result[0].email == "ravi@example.com"
        assert result[0].amount == Decimal("7500")

    def test_payments_on_day(self, sample_payments):
        result = queries.payments_on(sample_payments, date(2026, 10, 17))
        assert [p.transaction_id for p in result] == ["TXN-2", "TXN-1"]

    def test_recent_payments(self, conn):
        now = datetime.now(timezone.utc)
        conn.execute(payments.insert(), [
            _payment("NEW", "PrimeStart", "5000", "a@example.com", now - timedelta(days=1)),
            _payment("OLD", "PrimeStart", "5000", "b@example.com", now - timedelta(days=30)),
        ])

        assert [p.transaction_id for p in queries.recent_payments(conn)] == ["NEW"]
        assert len(queries.recent_payments(conn, days=60)) == 2


class TestStatsSnapshot:

    def test_snapshot_writes_metrics(self, sample_payments):
        day = date(2026, 10, 17)
        metrics = queries.snapshot_daily_stats(sample_payments, day)

        assert metrics == {
            "daily_revenue": Decimal("12500"),
            "daily_payments": Decimal("2"),
            "total_customers": Decimal("2"),
        }
        rows = sample_payments.execute(
            select(stats.c.metric_name, stats.c.metric_value, stats.c.date)
            .order_by(stats.c.id)
        ).all()
        assert [tuple(r) for r in rows] == [
            ("daily_revenue", Decimal("12500"), day),
            ("daily_payments", Decimal("2"), day),
            ("total_customers", Decimal("2"), day),
        ]

    def test_snapshot_appends_on_rerun(self, sample_payments):
        day = date(2026, 10, 18)
        queries.snapshot_daily_stats(sample_payments, day)
        queries.snapshot_daily_stats(sample_payments, day)

        count = sample_payments.execute(
            select(func.count()).select_from(stats).where(stats.c.date == day)
        ).scalar_one()
        assert count == 6

    def test_payment_count_for_day(self, sample_payments):
        assert queries.payment_count_for_day(sample_payments, date(2026, 10, 17)) == 2
        assert queries.payment_count_for_day(sample_payments, date(2026, 10, 18)) == 1
        assert queries.payment_count_for_day(sample_payments, date(2026, 10, 19)) == 0
