"""Fixtures for API tests: in-memory catalog, mocked stores."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from invoicedesk.api.dependencies import (
    get_catalog,
    get_create_customer_use_case,
    get_create_product_use_case,
    get_registry,
    get_submit_invoice_use_case,
    get_tx_store,
)
from invoicedesk.api.main import app
from invoicedesk.application.services import DraftRegistry, get_catalog_index
from invoicedesk.application.use_cases import (
    CreateCustomerUseCase,
    CreateProductUseCase,
    SubmitInvoiceUseCase,
)
from invoicedesk.core.entities import Transaction
from invoicedesk.core.services import CatalogIndex


def stored_transaction(submission, transaction_id: int = 1) -> Transaction:
    """What the persistence boundary returns for ``submission``."""
    return Transaction(
        **submission.transaction.model_dump(),
        id=transaction_id,
        items=[
            item.model_copy(update={"id": i + 1, "transaction_id": transaction_id})
            for i, item in enumerate(submission.items)
        ],
    )


@pytest.fixture
async def shared_catalog(catalog_source) -> CatalogIndex:
    return await get_catalog_index(catalog_source)


@pytest.fixture
def registry() -> DraftRegistry:
    return DraftRegistry(max_open=3)


@pytest.fixture
def mock_tx_store():
    store = AsyncMock()
    store.create_transaction.side_effect = stored_transaction
    return store


@pytest.fixture
async def client(
    shared_catalog, catalog_source, registry, mock_tx_store
) -> AsyncGenerator[AsyncClient, None]:
    async def _catalog() -> CatalogIndex:
        return shared_catalog

    app.dependency_overrides[get_catalog] = _catalog
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_tx_store] = lambda: mock_tx_store
    app.dependency_overrides[get_submit_invoice_use_case] = lambda: SubmitInvoiceUseCase(
        transaction_store=mock_tx_store
    )
    app.dependency_overrides[get_create_product_use_case] = lambda: CreateProductUseCase(
        catalog_source
    )
    app.dependency_overrides[get_create_customer_use_case] = lambda: CreateCustomerUseCase(
        catalog_source
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
