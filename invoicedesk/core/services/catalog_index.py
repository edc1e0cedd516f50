"""
In-memory catalog lookup.

Backs all three ways of putting a product on an invoice: picking it from
a dropdown (by id), typing into the search box, and scanning a barcode.
The index only ever holds a reference to one immutable snapshot; refreshing
swaps that reference in a single assignment.
"""

from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import CatalogSnapshot, Customer, Product

logger = get_logger(__name__)

# The search panel lists only this many matches
DISPLAY_LIMIT = 5


def _matches(product: Product, query: str) -> bool:
    """Case-insensitive on name and SKU, case-sensitive containment on barcode."""
    needle = query.lower()
    if needle in product.name.lower() or needle in product.sku.lower():
        return True
    return bool(product.barcode) and query in product.barcode  # type: ignore[operator]


class CatalogIndex:
    """Read-only product and customer lookups over the current snapshot."""

    def __init__(
        self,
        snapshot: CatalogSnapshot | None = None,
        display_limit: int = DISPLAY_LIMIT,
    ) -> None:
        self._snapshot = snapshot or CatalogSnapshot()
        self.display_limit = display_limit

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def products(self) -> tuple[Product, ...]:
        return self._snapshot.products

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._snapshot.customers

    def refresh(self, snapshot: CatalogSnapshot) -> None:
        """Replace the snapshot in one step."""
        self._snapshot = snapshot
        logger.info(
            "catalog_index_refreshed",
            products=len(snapshot.products),
            customers=len(snapshot.customers),
        )

    def find_product_by_id(self, product_id: str) -> Product | None:
        for product in self._snapshot.products:
            if product.id == product_id:
                return product
        return None

    def find_product_by_barcode(self, code: str) -> Product | None:
        """Exact, case-sensitive barcode match; first hit in catalog order."""
        if not code:
            return None
        for product in self._snapshot.products:
            if product.barcode is not None and product.barcode == code:
                return product
        return None

    def search(self, query: str) -> list[Product]:
        """
        All products matching ``query`` in catalog order.

        An empty query matches nothing. The predicate itself is unbounded;
        use ``search_for_display`` for the capped list shown to operators.
        """
        if not query:
            return []
        return [p for p in self._snapshot.products if _matches(p, query)]

    def search_for_display(self, query: str, limit: int | None = None) -> list[Product]:
        """First ``limit`` (default 5) matches, as shown in the search panel."""
        cap = self.display_limit if limit is None else limit
        return self.search(query)[:cap]

    def find_customer_by_id(self, customer_id: str) -> Customer | None:
        for customer in self._snapshot.customers:
            if customer.id == customer_id:
                return customer
        return None
