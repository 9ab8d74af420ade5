"""Shared SQLAlchemy metadata and column types for the payment schema.

Every table module registers on this single MetaData instance so that
Alembic and ``apply_schema`` manage all tables together.
"""

from sqlalchemy import JSON, BigInteger, Integer, MetaData, Numeric, text
from sqlalchemy.dialects.postgresql import JSONB

metadata = MetaData()

# BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
SurrogateKey = BigInteger().with_variant(Integer(), "sqlite")

# DECIMAL(10, 2)
Money = Numeric(10, 2)

JSONBlob = JSON().with_variant(JSONB(), "postgresql")

CURRENT_TIMESTAMP = text("CURRENT_TIMESTAMP")
