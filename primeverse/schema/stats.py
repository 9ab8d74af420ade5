"""SQLAlchemy table definition for dated analytics metrics."""

from sqlalchemy import Table, Column, String, Date, DateTime, Index

from primeverse.schema.base import metadata, SurrogateKey, Money, CURRENT_TIMESTAMP

stats = Table(
    "stats",
    metadata,
    Column("id", SurrogateKey, primary_key=True, autoincrement=True),
    # No uniqueness across (metric_name, date)
    Column("metric_name", String(50), nullable=False),
    Column("metric_value", Money, nullable=True),
    Column("date", Date, nullable=False),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    Index("idx_stats_metric", "metric_name"),
    Index("idx_stats_date", "date"),
)
