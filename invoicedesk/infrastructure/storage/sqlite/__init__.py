"""SQLite storage implementations."""

from invoicedesk.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from invoicedesk.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from invoicedesk.infrastructure.storage.sqlite.transaction_store import (
    SQLiteTransactionStore,
)

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_transaction_store: SQLiteTransactionStore | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_transaction_store() -> SQLiteTransactionStore:
    """Get singleton transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteTransactionStore()
    return _transaction_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteTransactionStore",
    # Factory functions
    "get_catalog_store",
    "get_transaction_store",
]
