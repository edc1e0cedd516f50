"""Create Product Use Case: add a product and refresh the catalog index."""

import uuid

from invoicedesk.application.dto.requests import CreateProductRequest
from invoicedesk.application.services import refresh_catalog_index
from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import Product
from invoicedesk.core.entities.line_item import ZERO, parse_amount, to_decimal_string
from invoicedesk.core.exceptions import ValidationError
from invoicedesk.core.interfaces.catalog_source import ICatalogSource

logger = get_logger(__name__)


class CreateProductUseCase:
    """Persist a new product so search and scanning can find it."""

    def __init__(self, catalog_source: ICatalogSource | None = None):
        self._catalog_source = catalog_source

    async def _get_catalog_source(self) -> ICatalogSource:
        if self._catalog_source is None:
            from invoicedesk.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_source = await get_catalog_store()
        return self._catalog_source

    async def execute(self, request: CreateProductRequest) -> Product:
        price = parse_amount(request.price) if request.price.strip() else ZERO
        if price is None or price < 0:
            raise ValidationError("price", "Price must be a non-negative number", request.price)

        source = await self._get_catalog_source()
        product = await source.create_product(
            Product(
                id=request.id or uuid.uuid4().hex,
                name=request.name.strip(),
                sku=request.sku.strip(),
                barcode=request.barcode.strip() if request.barcode else None,
                price=to_decimal_string(price),
                quantity=request.quantity,
            )
        )
        await refresh_catalog_index(source)
        logger.info("product_added", product_id=product.id)
        return product
