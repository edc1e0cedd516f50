"""Abstract interface for the product/customer catalog."""

from abc import ABC, abstractmethod

from invoicedesk.core.entities.catalog import CatalogSnapshot, Customer, Product


class ICatalogSource(ABC):
    """Supplies product and customer snapshots on demand."""

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """All products in catalog order."""
        pass

    @abstractmethod
    async def list_customers(self) -> list[Customer]:
        """All customers in catalog order."""
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Add a product to the catalog."""
        pass

    @abstractmethod
    async def create_customer(self, customer: Customer) -> Customer:
        """Add a customer to the catalog."""
        pass

    async def load_snapshot(self) -> CatalogSnapshot:
        """Read both lists into one immutable snapshot."""
        products = await self.list_products()
        customers = await self.list_customers()
        return CatalogSnapshot(products=tuple(products), customers=tuple(customers))
