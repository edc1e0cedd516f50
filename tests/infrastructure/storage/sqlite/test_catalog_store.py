"""Tests for SQLite catalog store."""

import pytest

from invoicedesk.core.entities import Customer, Product
from invoicedesk.core.exceptions import DuplicateCatalogEntryError
from invoicedesk.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore


class TestSQLiteCatalogStore:
    async def test_products_in_insertion_order(self, db_settings):
        store = SQLiteCatalogStore()
        await store.create_product(Product(id="z", name="Zeta", sku="Z1", barcode="9", price="1.10"))
        await store.create_product(Product(id="a", name="Alpha", sku="A1", price="2"))

        products = await store.list_products()

        assert [p.id for p in products] == ["z", "a"]
        assert products[0].price == "1.10"
        assert products[0].barcode == "9"
        assert products[1].barcode is None
        assert products[0].created_at is not None

    async def test_duplicate_sku(self, db_settings):
        store = SQLiteCatalogStore()
        await store.create_product(Product(id="p1", name="A", sku="SAME"))

        with pytest.raises(DuplicateCatalogEntryError):
            await store.create_product(Product(id="p2", name="B", sku="SAME"))

    async def test_customers(self, db_settings):
        store = SQLiteCatalogStore()
        created = await store.create_customer(Customer(id="c1", name="Acme", phone="555"))

        customers = await store.list_customers()

        assert created.created_at is not None
        assert [(c.id, c.name, c.phone) for c in customers] == [("c1", "Acme", "555")]

    async def test_duplicate_customer_id(self, db_settings):
        store = SQLiteCatalogStore()
        await store.create_customer(Customer(id="c1", name="Acme"))

        with pytest.raises(DuplicateCatalogEntryError):
            await store.create_customer(Customer(id="c1", name="Other"))

    async def test_load_snapshot(self, db_settings):
        store = SQLiteCatalogStore()
        await store.create_product(Product(id="p1", name="Cola", sku="C1", barcode="123", price="2.50"))
        await store.create_customer(Customer(id="c1", name="Acme"))

        snapshot = await store.load_snapshot()

        assert [p.barcode for p in snapshot.products] == ["123"]
        assert [c.id for c in snapshot.customers] == ["c1"]
