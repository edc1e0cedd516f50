"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from fastapi import Depends

from invoicedesk.application.services import (
    DraftRegistry,
    DraftSession,
    get_catalog_index,
    get_draft_registry,
)
from invoicedesk.application.use_cases import (
    CreateCustomerUseCase,
    CreateProductUseCase,
    SubmitInvoiceUseCase,
)
from invoicedesk.config import bind_draft_context
from invoicedesk.core.services import CatalogIndex
from invoicedesk.infrastructure.storage.sqlite import (
    SQLiteTransactionStore,
    get_transaction_store,
)


# Service dependencies
async def get_catalog() -> CatalogIndex:
    """Get the shared catalog index."""
    return await get_catalog_index()


def get_registry() -> DraftRegistry:
    """Get the open-draft registry."""
    return get_draft_registry()


def get_draft_session(
    draft_id: str,
    registry: DraftRegistry = Depends(get_registry),
) -> DraftSession:
    """Resolve an open editing session and tag log events with its id."""
    session = registry.get(draft_id)
    bind_draft_context(draft_id)
    return session


# Use case dependencies
def get_submit_invoice_use_case() -> SubmitInvoiceUseCase:
    """Get submit invoice use case."""
    return SubmitInvoiceUseCase()


def get_create_customer_use_case() -> CreateCustomerUseCase:
    """Get create customer use case."""
    return CreateCustomerUseCase()


def get_create_product_use_case() -> CreateProductUseCase:
    """Get create product use case."""
    return CreateProductUseCase()


# Store dependencies
async def get_tx_store() -> SQLiteTransactionStore:
    """Get transaction store."""
    return await get_transaction_store()
