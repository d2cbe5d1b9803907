"""
Tests for database pool management.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.config import Settings
from app.database import SCHEMA_SQL, DatabaseManager

from fakes import FakeConnection, FakePool


@pytest.fixture
def db_settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="postgresql://u:p@localhost/orders",
        DB_MAX_OPEN_CONNS=10,
        DB_MAX_IDLE_CONNS=2,
        DB_CONN_MAX_AGE=120,
        DB_COMMAND_TIMEOUT=5,
    )


class TestDatabaseManager:
    """Test pool lifecycle."""

    @pytest.mark.asyncio
    async def test_connect_creates_pool_once(self, db_settings):
        pool = AsyncMock()
        with patch("app.database.asyncpg.create_pool", AsyncMock(return_value=pool)) as create:
            manager = DatabaseManager(db_settings)

            assert await manager.connect() is pool
            assert await manager.connect() is pool

        create.assert_awaited_once_with(
            "postgresql://u:p@localhost/orders",
            min_size=2,
            max_size=10,
            max_inactive_connection_lifetime=120,
            command_timeout=5,
        )

    @pytest.mark.asyncio
    async def test_disconnect_closes_pool(self, db_settings):
        pool = AsyncMock()
        with patch("app.database.asyncpg.create_pool", AsyncMock(return_value=pool)):
            manager = DatabaseManager(db_settings)
            await manager.connect()
            await manager.disconnect()

        pool.close.assert_awaited_once()
        assert manager.pool is None

    @pytest.mark.asyncio
    async def test_disconnect_without_pool(self, db_settings):
        manager = DatabaseManager(db_settings)
        await manager.disconnect()
        assert manager.pool is None

    @pytest.mark.asyncio
    async def test_ensure_schema(self, db_settings):
        conn = FakeConnection()
        manager = DatabaseManager(db_settings)
        manager.pool = FakePool(conn)

        await manager.ensure_schema()

        assert conn.calls == [("execute", SCHEMA_SQL, ())]
        assert "CREATE TABLE IF NOT EXISTS order_items" in SCHEMA_SQL
