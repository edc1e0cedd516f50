"""Pytest configuration and fixtures."""

import pytest

from invoicedesk.application.services import reset_services
from invoicedesk.core.entities import CatalogSnapshot, Customer, Product
from invoicedesk.core.interfaces import ICatalogSource
from invoicedesk.core.services import CatalogIndex, InvoiceEditor


class InMemoryCatalogSource(ICatalogSource):
    """Catalog source backed by two lists."""

    def __init__(self, products=None, customers=None):
        self.products: list[Product] = list(products or [])
        self.customers: list[Customer] = list(customers or [])

    async def list_products(self) -> list[Product]:
        return list(self.products)

    async def list_customers(self) -> list[Customer]:
        return list(self.customers)

    async def create_product(self, product: Product) -> Product:
        self.products.append(product)
        return product

    async def create_customer(self, customer: Customer) -> Customer:
        self.customers.append(customer)
        return customer


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep the shared catalog index and draft registry per-test."""
    reset_services()
    yield
    reset_services()


@pytest.fixture
def sample_products() -> tuple[Product, ...]:
    return (
        Product(id="p1", name="Cola 330ml", sku="COLA-330", barcode="123", price="2.50", quantity=40),
        Product(id="p2", name="Widget", sku="WID-001", barcode="456", price="10", quantity=3),
        Product(id="p3", name="Gadget", sku="GAD-001", barcode=None, price="5", quantity=0),
        Product(id="p4", name="Cola Zero", sku="COLA-Z", barcode="1234", price="2.75", quantity=12),
    )


@pytest.fixture
def sample_customers() -> tuple[Customer, ...]:
    return (
        Customer(id="c1", name="Acme Ltd", phone="+90 555 000 0001"),
        Customer(id="c2", name="Globex"),
    )


@pytest.fixture
def catalog_source(sample_products, sample_customers) -> InMemoryCatalogSource:
    return InMemoryCatalogSource(sample_products, sample_customers)


@pytest.fixture
def catalog(sample_products, sample_customers) -> CatalogIndex:
    """Catalog index over the sample products and customers."""
    return CatalogIndex(
        CatalogSnapshot(products=sample_products, customers=sample_customers)
    )


@pytest.fixture
def editor(catalog: CatalogIndex) -> InvoiceEditor:
    """Fresh editing session: one blank row, TRY, cash."""
    return InvoiceEditor(catalog)
