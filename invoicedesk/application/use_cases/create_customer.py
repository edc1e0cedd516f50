"""Create Customer Use Case: add a customer and refresh the catalog index."""

import uuid

from invoicedesk.application.dto.requests import CreateCustomerRequest
from invoicedesk.application.services import refresh_catalog_index
from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import Customer
from invoicedesk.core.interfaces.catalog_source import ICatalogSource

logger = get_logger(__name__)


class CreateCustomerUseCase:
    """Persist a new customer so it can be picked on open drafts."""

    def __init__(self, catalog_source: ICatalogSource | None = None):
        self._catalog_source = catalog_source

    async def _get_catalog_source(self) -> ICatalogSource:
        if self._catalog_source is None:
            from invoicedesk.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_source = await get_catalog_store()
        return self._catalog_source

    async def execute(self, request: CreateCustomerRequest) -> Customer:
        source = await self._get_catalog_source()
        customer = await source.create_customer(
            Customer(id=uuid.uuid4().hex, name=request.name.strip(), phone=request.phone)
        )
        await refresh_catalog_index(source)
        logger.info("customer_added", customer_id=customer.id)
        return customer
