"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from invoicedesk.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database with the full schema applied."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def db_settings(initialized_db: Path) -> AsyncGenerator[MagicMock, None]:
    """Point the global connection pool at the temporary database."""
    import invoicedesk.infrastructure.storage.sqlite.connection as conn_module

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = initialized_db
    mock_settings.storage.pool_size = 1
    mock_settings.storage.busy_timeout = 5000
    mock_settings.storage.acquire_timeout = 5.0

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield mock_settings
        finally:
            await conn_module.close_pool()
