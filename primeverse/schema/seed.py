"""Seed the static program catalog.

PostgreSQL and SQLite get a single ``INSERT ... ON CONFLICT (name) DO
NOTHING``; other dialects check for each name before inserting.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection
from sqlalchemy.sql.dml import Insert

from primeverse.logging_config import get_logger
from primeverse.schema.programs import PROGRAM_SEED, programs

logger = get_logger(name=__name__)

_CONFLICT_SKIP_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def program_seed_statement(dialect_name: str) -> Optional[Insert]:
    """Conflict-skip insert of the catalog, or None if the dialect lacks one."""
    insert = _CONFLICT_SKIP_INSERTS.get(dialect_name)
    if insert is None:
        return None
    return (
        insert(programs)
        .values(PROGRAM_SEED)
        .on_conflict_do_nothing(index_elements=["name"])
    )


def seed_programs(connection: Connection) -> int:
    """Insert the fixed program rows, skipping names that already exist.

    Returns:
        Number of rows actually inserted.
    """
    stmt = program_seed_statement(connection.dialect.name)
    if stmt is not None:
        inserted = connection.execute(stmt).rowcount
    else:
        inserted = 0
        for row in PROGRAM_SEED:
            existing = connection.execute(
                select(programs.c.id).where(programs.c.name == row["name"])
            ).first()
            if existing is None:
                connection.execute(programs.insert().values(**row))
                inserted += 1

    logger.info("Seeded {} of {} programs", inserted, len(PROGRAM_SEED))
    return inserted
