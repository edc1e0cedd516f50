"""Core interfaces (ports) for dependency injection."""

from invoicedesk.core.interfaces.catalog_source import ICatalogSource
from invoicedesk.core.interfaces.transaction_store import ITransactionStore

__all__ = [
    "ICatalogSource",
    "ITransactionStore",
]
