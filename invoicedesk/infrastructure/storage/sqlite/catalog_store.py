"""SQLite implementation of the product/customer catalog."""

from datetime import datetime

import aiosqlite

from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import Customer, Product
from invoicedesk.core.exceptions import DuplicateCatalogEntryError
from invoicedesk.core.interfaces.catalog_source import ICatalogSource
from invoicedesk.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


class SQLiteCatalogStore(ICatalogSource):
    """Products and customers, returned in insertion order."""

    async def list_products(self) -> list[Product]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products ORDER BY rowid")
            rows = await cursor.fetchall()
        return [self._row_to_product(r) for r in rows]

    async def list_customers(self) -> list[Customer]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM customers ORDER BY rowid")
            rows = await cursor.fetchall()
        return [self._row_to_customer(r) for r in rows]

    async def create_product(self, product: Product) -> Product:
        now = datetime.utcnow()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (id, name, sku, barcode, price, quantity, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.id,
                        product.name,
                        product.sku,
                        product.barcode,
                        product.price,
                        product.quantity,
                        now.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateCatalogEntryError("Product", f"{product.id}/{product.sku}") from e

        logger.info("product_created", product_id=product.id, sku=product.sku)
        return product.model_copy(update={"created_at": now})

    async def create_customer(self, customer: Customer) -> Customer:
        now = datetime.utcnow()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    "INSERT INTO customers (id, name, phone, created_at) VALUES (?, ?, ?, ?)",
                    (customer.id, customer.name, customer.phone, now.isoformat()),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateCatalogEntryError("Customer", customer.id) from e

        logger.info("customer_created", customer_id=customer.id)
        return customer.model_copy(update={"created_at": now})

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            sku=row["sku"],
            barcode=row["barcode"],
            price=row["price"],
            quantity=int(row["quantity"]),
            created_at=_parse_timestamp(row["created_at"]),
        )

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        return Customer(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            created_at=_parse_timestamp(row["created_at"]),
        )
