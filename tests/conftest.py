"""
Pytest configuration and fixtures for the payment schema tests.

Every test gets its own file-backed SQLite database. PostgreSQL-only
behavior lives in test_postgres.py and needs PRIMEVERSE_TEST_POSTGRES_URL.
"""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine

from primeverse.schema.setup import apply_schema


@pytest.fixture
def engine(tmp_path):
    """Empty SQLite database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'primeverse.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def applied_engine(engine):
    """SQLite database with the schema applied and programs seeded."""
    with engine.begin() as conn:
        apply_schema(conn)
    return engine


@pytest.fixture
def conn(applied_engine):
    """Connection inside a transaction on the applied schema."""
    with applied_engine.begin() as conn:
        yield conn


@pytest.fixture
def payment_data():
    """Minimal valid payment."""
    return {
        "program": "PrimeStart",
        "full_name": "Test User",
        "email": "test@example.com",
        "phone": "9876543210",
        "transaction_id": "TEST-123-456",
        "amount": Decimal("5000"),
    }
