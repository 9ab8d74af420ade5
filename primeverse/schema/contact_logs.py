"""SQLAlchemy table definition for contact attempts (append-only)."""

from sqlalchemy import Table, Column, String, Text, DateTime, Index

from primeverse.schema.base import metadata, SurrogateKey, CURRENT_TIMESTAMP

contact_logs = Table(
    "contact_logs",
    metadata,
    Column("id", SurrogateKey, primary_key=True, autoincrement=True),
    Column("program", String(50), nullable=False),
    Column("contact_method", String(20), nullable=False),
    # 45 chars fits an IPv4-mapped IPv6 address
    Column("user_ip", String(45), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    Index("idx_contact_logs_program", "program"),
    Index("idx_contact_logs_created_at", "created_at"),
    Index("idx_contact_logs_method", "contact_method"),
)
