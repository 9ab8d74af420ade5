"""SQLAlchemy table definition for completed payments.

``updated_at`` only has an insert default. Nothing refreshes it on update.
"""

from sqlalchemy import (
    Table,
    Column,
    String,
    DateTime,
    Index,
    UniqueConstraint,
)

from primeverse.schema.base import metadata, SurrogateKey, Money, CURRENT_TIMESTAMP

payments = Table(
    "payments",
    metadata,
    Column("id", SurrogateKey, primary_key=True, autoincrement=True),
    Column("program", String(50), nullable=False),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(20), nullable=False),
    Column("transaction_id", String(255), nullable=False),
    # Non-negative by convention only
    Column("amount", Money, nullable=False),
    Column("currency", String(10), server_default="INR"),
    Column("payment_method", String(50), server_default="UPI"),
    Column("status", String(50), server_default="completed"),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    Column(
        "updated_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    UniqueConstraint("transaction_id", name="payments_transaction_id_key"),
    Index("idx_payments_email", "email"),
    Index("idx_payments_phone", "phone"),
    Index("idx_payments_transaction_id", "transaction_id"),
    Index("idx_payments_created_at", "created_at"),
    Index("idx_payments_program", "program"),
    Index("idx_payments_status", "status"),
)
