#!/usr/bin/env python3
"""
Payment Schema Management CLI

Usage:
    python -m primeverse.scripts.schema_cli apply                 # Create tables, indexes, policies, seed
    python -m primeverse.scripts.schema_cli apply --no-seed       # Same, without the program catalog
    python -m primeverse.scripts.schema_cli verify                # Report missing tables/indexes/policies
    python -m primeverse.scripts.schema_cli verify --alembic      # Also require Alembic at head
    python -m primeverse.scripts.schema_cli report totals         # Count + revenue
    python -m primeverse.scripts.schema_cli report daily --limit 7
    python -m primeverse.scripts.schema_cli snapshot-stats --date 2026-10-18

The database URL comes from POSTGRES_URL (.env) unless --database-url is given.
SEED_PROGRAMS=false disables the catalog insert the same way --no-seed does.
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import Optional

from primeverse.config.postgres import (
    dispose_engine,
    get_db_transaction,
    get_engine,
    init_engine_from_settings,
)
from primeverse.logging_config import configure_logging, get_logger
from primeverse.reports import queries
from primeverse.schema.setup import (
    apply_schema_async,
    check_alembic_current,
    verify_schema,
)
from primeverse.settings import Settings, get_settings

logger = get_logger(name=__name__)

REPORTS = [
    "totals",
    "programs",
    "daily",
    "hourly",
    "today",
    "recent",
    "duplicates",
    "stats",
    "customers",
    "payments",
]


async def apply_command(args, settings: Settings) -> int:
    """Apply the schema idempotently."""
    seed = settings.seed_programs and not args.no_seed
    result = await apply_schema_async(get_engine(), seed=seed)

    print(f"Tables created:     {', '.join(result.tables_created) or '-'}")
    print(f"Indexes created:    {', '.join(result.indexes_created) or '-'}")
    print(f"Policies installed: {', '.join(result.policies_installed) or '-'}")
    print(f"Programs seeded:    {result.programs_seeded}")
    if not result.changed:
        print("Schema already up to date.")
    return 0


async def verify_command(args, settings: Settings) -> int:
    """Check the schema without changing it."""
    engine = get_engine()
    async with engine.connect() as conn:
        status = await conn.run_sync(verify_schema)

    if args.alembic:
        try:
            revision = await check_alembic_current(engine)
            print(f"Alembic revision: {revision}")
        except RuntimeError as e:
            print(f"❌ {e}")
            return 1

    if status.ok:
        print(f"✅ Schema complete ({status.dialect})")
        return 0

    for label, missing in (
        ("Missing tables", status.missing_tables),
        ("Missing indexes", status.missing_indexes),
        ("Missing policies", status.missing_policies),
        ("RLS disabled on", status.rls_disabled),
    ):
        if missing:
            print(f"❌ {label}: {', '.join(missing)}")
    return 1


def _run_report(conn, name: str, limit: Optional[int], days: int, program: Optional[str]):
    # Without --limit each query keeps its own window (30 days, 24 hours, all payments)
    window = {} if limit is None else {"limit": limit}
    if name == "totals":
        return [queries.revenue_totals(conn)]
    if name == "programs":
        return queries.revenue_by_program(conn)
    if name == "daily":
        return queries.daily_revenue(conn, **window)
    if name == "hourly":
        return queries.hourly_trend(conn, **window)
    if name == "today":
        return queries.payments_on(conn)
    if name == "recent":
        return queries.recent_payments(conn, days=days)
    if name == "duplicates":
        return queries.duplicate_transactions(conn)
    if name == "stats":
        return [queries.payment_statistics(conn)]
    if name == "customers":
        return [{"total_customers": queries.total_customers(conn)}]
    return queries.list_payments(conn, program=program, limit=limit)


async def report_command(args, settings: Settings) -> int:
    """Print one of the monitoring reports."""
    async with get_engine().connect() as conn:
        rows = await conn.run_sync(
            _run_report, args.name, args.limit, args.days, args.program
        )

    if not rows:
        print("No rows.")
        return 0

    print("-" * 100)
    for row in rows:
        values = row if isinstance(row, dict) else row.model_dump()
        print("  ".join(f"{key}={value}" for key, value in values.items()))
    print("-" * 100)
    print(f"{len(rows)} row(s)")
    return 0


async def snapshot_stats_command(args, settings: Settings) -> int:
    """Append the day's aggregate metrics to the stats table."""
    async with get_db_transaction() as conn:
        metrics = await conn.run_sync(queries.snapshot_daily_stats, args.date)

    for name, value in metrics.items():
        print(f"{name:<20} {value}")
    return 0


COMMANDS = {
    "apply": apply_command,
    "verify": verify_command,
    "report": report_command,
    "snapshot-stats": snapshot_stats_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage the payment tracking schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--database-url",
        help="Async SQLAlchemy URL; overrides POSTGRES_URL",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_parser = subparsers.add_parser("apply", help="Create missing schema objects")
    apply_parser.add_argument(
        "--no-seed", action="store_true", help="Skip the program catalog insert"
    )

    verify_parser = subparsers.add_parser("verify", help="Report missing schema objects")
    verify_parser.add_argument(
        "--alembic", action="store_true", help="Also require Alembic at head"
    )

    report_parser = subparsers.add_parser("report", help="Print a monitoring report")
    report_parser.add_argument("name", choices=REPORTS)
    report_parser.add_argument(
        "--limit", type=int, default=None, help="Row cap; defaults to the report's own window"
    )
    report_parser.add_argument("--days", type=int, default=7)
    report_parser.add_argument("--program", help="Filter 'payments' by program")

    stats_parser = subparsers.add_parser(
        "snapshot-stats", help="Write daily metrics into the stats table"
    )
    stats_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to snapshot (YYYY-MM-DD), defaults to today (UTC)",
    )

    return parser


async def run(args) -> int:
    if args.database_url:
        settings = Settings(postgres_url=args.database_url)
    else:
        settings = get_settings()
    init_engine_from_settings(settings)

    try:
        return await COMMANDS[args.command](args, settings)
    finally:
        await dispose_engine()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return asyncio.run(run(args))
    except Exception as e:
        logger.exception("Command {} failed: {}", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
