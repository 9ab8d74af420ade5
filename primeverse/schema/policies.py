"""Row-level security policies for the publicly writable tables.

No authentication sits in front of these tables: anyone holding the
public key may insert payments and contact logs, and may read every
payment (names, emails, phones, amounts). That exposure is deliberate
and is logged whenever the policies are (re)installed.

Policies are PostgreSQL-only. Each one is installed as
``DROP POLICY IF EXISTS`` + ``CREATE POLICY`` so re-running is a no-op.
"""

from dataclasses import dataclass
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from primeverse.logging_config import get_logger

logger = get_logger(name=__name__)


@dataclass(frozen=True)
class AccessPolicy:
    """A single permissive row-level policy."""
    table: str
    name: str
    command: str  # INSERT or SELECT

    @property
    def clause(self) -> str:
        # INSERT policies are checked against the new row, SELECT against existing rows
        if self.command == "INSERT":
            return "WITH CHECK (true)"
        return "USING (true)"

    def drop_sql(self) -> str:
        return f'DROP POLICY IF EXISTS "{self.name}" ON public.{self.table}'

    def create_sql(self) -> str:
        return (
            f'CREATE POLICY "{self.name}" ON public.{self.table} '
            f"FOR {self.command} {self.clause}"
        )


PUBLIC_POLICIES = [
    AccessPolicy("payments", "Allow public insert", "INSERT"),
    AccessPolicy("payments", "Allow public select", "SELECT"),
    AccessPolicy("contact_logs", "Allow public insert contact logs", "INSERT"),
]

# Tables with row-level security switched on, in apply order
RLS_TABLES = ["payments", "contact_logs"]


def enable_rls_sql(table: str) -> str:
    return f"ALTER TABLE public.{table} ENABLE ROW LEVEL SECURITY"


def policy_statements() -> List[str]:
    """All DDL statements that install the public access rules, in order."""
    statements = []
    for table in RLS_TABLES:
        statements.append(enable_rls_sql(table))
        for policy in PUBLIC_POLICIES:
            if policy.table == table:
                statements.append(policy.drop_sql())
                statements.append(policy.create_sql())
    return statements


def drop_policy_statements() -> List[str]:
    """DDL that removes the public policies and switches RLS back off."""
    statements = [policy.drop_sql() for policy in PUBLIC_POLICIES]
    statements.extend(
        f"ALTER TABLE public.{table} DISABLE ROW LEVEL SECURITY" for table in RLS_TABLES
    )
    return statements


def supports_rls(connection: Connection) -> bool:
    return connection.dialect.name == "postgresql"


def install_policies(connection: Connection) -> List[str]:
    """Enable RLS and (re)create the public policies.

    Returns:
        Names of the policies installed, empty when the dialect has no RLS.
    """
    if not supports_rls(connection):
        logger.info(
            "Dialect {} has no row-level security; skipping access policies",
            connection.dialect.name,
        )
        return []

    for statement in policy_statements():
        connection.execute(text(statement))

    for policy in PUBLIC_POLICIES:
        if policy.command == "SELECT":
            logger.warning(
                'Policy "{}" lets unauthenticated callers read every row of {}',
                policy.name,
                policy.table,
            )

    return [policy.name for policy in PUBLIC_POLICIES]


def list_policies(connection: Connection) -> List[dict]:
    """Read installed policies for the RLS tables from pg_policies."""
    if not supports_rls(connection):
        return []

    result = connection.execute(
        text(
            "SELECT schemaname, tablename, policyname, cmd "
            "FROM pg_policies "
            "WHERE schemaname = 'public' AND tablename = ANY(:tables) "
            "ORDER BY tablename, policyname"
        ),
        {"tables": RLS_TABLES},
    )
    return [dict(row._mapping) for row in result]


def rls_enabled_tables(connection: Connection) -> List[str]:
    """Names of public tables that currently have RLS switched on."""
    if not supports_rls(connection):
        return []

    result = connection.execute(
        text(
            "SELECT c.relname FROM pg_class c "
            "JOIN pg_namespace n ON n.oid = c.relnamespace "
            "WHERE n.nspname = 'public' AND c.relrowsecurity "
            "AND c.relname = ANY(:tables)"
        ),
        {"tables": RLS_TABLES},
    )
    return sorted(row[0] for row in result)
