"""Initial schema — payments, contact logs, programs, stats.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from primeverse.schema.policies import drop_policy_statements, policy_statements
from primeverse.schema.seed import program_seed_statement

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── payments ───────────────────────────────────────────────────────

    op.create_table(
        "payments",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("program", sa.String(50), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("transaction_id", sa.String(255), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(10), server_default="INR"),
        sa.Column("payment_method", sa.String(50), server_default="UPI"),
        sa.Column("status", sa.String(50), server_default="completed"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("transaction_id", name="payments_transaction_id_key"),
    )
    op.create_index("idx_payments_email", "payments", ["email"])
    op.create_index("idx_payments_phone", "payments", ["phone"])
    op.create_index("idx_payments_transaction_id", "payments", ["transaction_id"])
    op.create_index("idx_payments_created_at", "payments", ["created_at"])
    op.create_index("idx_payments_program", "payments", ["program"])
    op.create_index("idx_payments_status", "payments", ["status"])

    # ── contact_logs ───────────────────────────────────────────────────

    op.create_table(
        "contact_logs",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("program", sa.String(50), nullable=False),
        sa.Column("contact_method", sa.String(20), nullable=False),
        sa.Column("user_ip", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("idx_contact_logs_program", "contact_logs", ["program"])
    op.create_index("idx_contact_logs_created_at", "contact_logs", ["created_at"])
    op.create_index("idx_contact_logs_method", "contact_logs", ["contact_method"])

    # ── Row-level security (public insert/select) ──────────────────────

    for statement in policy_statements():
        op.execute(statement)

    # ── programs ───────────────────────────────────────────────────────

    op.create_table(
        "programs",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("original_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("contact_phone", sa.String(20), nullable=True),
        sa.Column("whatsapp_number", sa.String(20), nullable=True),
        sa.Column("features", JSONB, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("name", name="programs_name_key"),
    )
    op.execute(program_seed_statement("postgresql"))

    # ── stats ──────────────────────────────────────────────────────────

    op.create_table(
        "stats",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("metric_name", sa.String(50), nullable=False),
        sa.Column("metric_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("idx_stats_metric", "stats", ["metric_name"])
    op.create_index("idx_stats_date", "stats", ["date"])


def downgrade() -> None:
    op.drop_index("idx_stats_date", table_name="stats")
    op.drop_index("idx_stats_metric", table_name="stats")
    op.drop_table("stats")

    op.drop_table("programs")

    for statement in drop_policy_statements():
        op.execute(statement)

    op.drop_index("idx_contact_logs_method", table_name="contact_logs")
    op.drop_index("idx_contact_logs_created_at", table_name="contact_logs")
    op.drop_index("idx_contact_logs_program", table_name="contact_logs")
    op.drop_table("contact_logs")

    for index_name in (
        "idx_payments_status",
        "idx_payments_program",
        "idx_payments_created_at",
        "idx_payments_transaction_id",
        "idx_payments_phone",
        "idx_payments_email",
    ):
        op.drop_index(index_name, table_name="payments")
    op.drop_table("payments")
