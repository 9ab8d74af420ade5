"""Apply and verify the payment schema.

``apply_schema`` is the idempotent setup step: it creates whatever
tables and indexes are missing, installs the row-level access policies
and seeds the program catalog. ``verify_schema`` reports what is
missing without changing anything.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field
from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from primeverse.logging_config import get_logger
from primeverse.schema.definitions import ALL_INDEXES, ALL_TABLES, metadata
from primeverse.schema.policies import (
    PUBLIC_POLICIES,
    RLS_TABLES,
    install_policies,
    list_policies,
    rls_enabled_tables,
    supports_rls,
)
from primeverse.schema.seed import seed_programs

logger = get_logger(name=__name__)

# Resolve package directory (this file is at primeverse/schema/setup.py)
_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class ApplyResult(BaseModel):
    """What a single apply_schema run created."""
    tables_created: List[str] = Field(default_factory=list)
    indexes_created: List[str] = Field(default_factory=list)
    policies_installed: List[str] = Field(default_factory=list)
    programs_seeded: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.tables_created or self.indexes_created or self.programs_seeded)


class SchemaStatus(BaseModel):
    """Result of verify_schema."""
    dialect: str
    missing_tables: List[str] = Field(default_factory=list)
    missing_indexes: List[str] = Field(default_factory=list)
    missing_policies: List[str] = Field(default_factory=list)
    rls_disabled: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (
            self.missing_tables
            or self.missing_indexes
            or self.missing_policies
            or self.rls_disabled
        )


def apply_schema(connection: Connection, seed: bool = True) -> ApplyResult:
    """Create missing tables and indexes, install policies, seed programs.

    Runs inside the caller's transaction; constraint errors propagate.

    Args:
        connection: Open SQLAlchemy connection (sync).
        seed: Insert the static program catalog.

    Returns:
        ApplyResult describing what changed.
    """
    result = ApplyResult()
    inspector = inspect(connection)
    existing_tables = set(inspector.get_table_names())

    for name in ALL_TABLES:
        table = metadata.tables[name]
        if name not in existing_tables:
            table.create(connection)
            result.tables_created.append(name)
            result.indexes_created.extend(sorted(ix.name for ix in table.indexes))
            continue

        existing_indexes = {ix["name"] for ix in inspector.get_indexes(name)}
        for index in sorted(table.indexes, key=lambda ix: ix.name):
            if index.name not in existing_indexes:
                index.create(connection)
                result.indexes_created.append(index.name)

    result.policies_installed = install_policies(connection)

    if seed:
        result.programs_seeded = seed_programs(connection)

    logger.info(
        "Schema applied: {} tables created, {} indexes created, {} policies, {} programs seeded",
        len(result.tables_created),
        len(result.indexes_created),
        len(result.policies_installed),
        result.programs_seeded,
    )
    return result


async def apply_schema_async(engine: AsyncEngine, seed: bool = True) -> ApplyResult:
    """Run apply_schema in one transaction on an async engine."""
    async with engine.begin() as conn:
        return await conn.run_sync(apply_schema, seed)


def verify_schema(connection: Connection) -> SchemaStatus:
    """Report missing tables, indexes and (on PostgreSQL) policies."""
    inspector = inspect(connection)
    status = SchemaStatus(dialect=connection.dialect.name)
    existing_tables = set(inspector.get_table_names())

    for name in ALL_TABLES:
        if name not in existing_tables:
            status.missing_tables.append(name)
            status.missing_indexes.extend(ALL_INDEXES[name])
            continue
        existing_indexes = {ix["name"] for ix in inspector.get_indexes(name)}
        status.missing_indexes.extend(
            ix for ix in ALL_INDEXES[name] if ix not in existing_indexes
        )

    if supports_rls(connection):
        installed = {
            (row["tablename"], row["policyname"]) for row in list_policies(connection)
        }
        status.missing_policies = [
            policy.name
            for policy in PUBLIC_POLICIES
            if (policy.table, policy.name) not in installed
        ]
        enabled = set(rls_enabled_tables(connection))
        status.rls_disabled = [t for t in RLS_TABLES if t not in enabled]

    if status.ok:
        logger.info("Schema verified on {}", status.dialect)
    else:
        logger.warning("Schema incomplete: {}", status.model_dump(exclude={"dialect"}))
    return status


async def check_alembic_current(engine: AsyncEngine) -> str:
    """Verify that the database is at the latest Alembic migration head.

    Returns:
        The current revision.

    Raises:
        RuntimeError: If the alembic_version table is missing or not at head.
    """
    from alembic.config import Config
    from alembic.script import ScriptDirectory

    cfg = Config(str(_PACKAGE_DIR / "alembic.ini"))
    # Override script_location to absolute path so it works from any cwd
    cfg.set_main_option("script_location", str(_PACKAGE_DIR / "alembic"))
    script = ScriptDirectory.from_config(cfg)
    expected_head = script.get_current_head()

    async with engine.connect() as conn:
        try:
            result = await conn.execute(
                text("SELECT version_num FROM alembic_version LIMIT 1")
            )
            row = result.first()
        except Exception as e:
            raise RuntimeError(
                "alembic_version table not found. Run 'alembic upgrade head' first."
            ) from e

    if row is None:
        raise RuntimeError(
            "No Alembic version found. Run 'alembic upgrade head' first."
        )

    current = row[0]
    if current != expected_head:
        raise RuntimeError(
            f"Database is at Alembic revision {current!r}, but head is {expected_head!r}. "
            f"Run 'alembic upgrade head'."
        )

    logger.info("Alembic migration is current (revision {})", current)
    return current
