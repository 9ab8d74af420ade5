"""Tests for the global async engine lifecycle."""

import asyncio

import pytest
from sqlalchemy import text

from primeverse.config.postgres import (
    dispose_engine,
    get_db_transaction,
    get_engine,
    init_engine,
    init_engine_from_settings,
)
from primeverse.settings import Settings


@pytest.fixture(autouse=True)
def no_engine():
    asyncio.run(dispose_engine())
    yield
    asyncio.run(dispose_engine())


class TestEngineLifecycle:

    def test_get_engine_before_init_raises(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            get_engine()

    def test_transaction_before_init_raises(self):
        async def scenario():
            async with get_db_transaction():
                pass

        with pytest.raises(RuntimeError):
            asyncio.run(scenario())

    def test_init_then_dispose(self, tmp_path):
        engine = init_engine(f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}")
        assert get_engine() is engine
        assert engine.dialect.name == "sqlite"

        asyncio.run(dispose_engine())

        with pytest.raises(RuntimeError):
            get_engine()

    def test_transaction_commits(self, tmp_path):
        init_engine(f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}")

        async def scenario():
            async with get_db_transaction() as conn:
                await conn.execute(text("CREATE TABLE t (x INTEGER)"))
                await conn.execute(text("INSERT INTO t VALUES (1)"))
            async with get_engine().connect() as conn:
                return (await conn.execute(text("SELECT count(*) FROM t"))).scalar_one()

        assert asyncio.run(scenario()) == 1

    def test_init_from_settings_with_override(self, tmp_path):
        settings = Settings(postgres_url="postgresql+asyncpg://localhost/unused", _env_file=None)

        engine = init_engine_from_settings(
            settings, database_url=f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}"
        )

        assert engine.dialect.name == "sqlite"
