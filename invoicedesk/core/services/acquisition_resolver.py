"""
Acquisition resolver.

Turns an operator action into a concrete line item:

- catalog select: fills product fields of an existing row
- clear: returns a row to unresolved so it can be picked again
- search pick: appends a new row for the picked product
- barcode scan: appends a new row for the product with that barcode

Search and scan always append. Repeating the same product produces
duplicate rows; rows are never merged.
"""

from dataclasses import dataclass

from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import Customer, Product
from invoicedesk.core.entities.invoice_draft import InvoiceDraft
from invoicedesk.core.entities.line_item import LineItem
from invoicedesk.core.entities.notification import Notification, product_added
from invoicedesk.core.exceptions import ItemIndexError, ProductNotFoundError
from invoicedesk.core.services.catalog_index import CatalogIndex

logger = get_logger(__name__)


@dataclass
class ResolverOutcome:
    """The row an operation produced and what to tell the operator."""

    item: LineItem
    index: int
    notification: Notification | None = None


def item_from_product(product: Product) -> LineItem:
    """New row for ``product`` with quantity 1."""
    return LineItem(
        product_id=product.id,
        product_name=product.name,
        quantity=1,
        price=product.price,
        total=product.price,
    )


def check_index(draft: InvoiceDraft, index: int) -> None:
    if index < 0 or index >= len(draft.items):
        raise ItemIndexError(index, len(draft.items))


class AcquisitionResolver:
    """Mutates a draft's item list from catalog, search and barcode actions."""

    def __init__(self, catalog: CatalogIndex) -> None:
        self._catalog = catalog

    def select_existing(
        self, draft: InvoiceDraft, index: int, product_id: str
    ) -> ResolverOutcome | None:
        """
        Point row ``index`` at a catalog product.

        Unknown ids are ignored: they come from a dropdown of known
        products, so a miss only means the catalog changed underneath.
        """
        check_index(draft, index)
        product = self._catalog.find_product_by_id(product_id)
        if product is None:
            logger.debug("catalog_select_ignored", index=index, product_id=product_id)
            return None

        row = draft.items[index]
        updated = row.model_copy(
            update={
                "product_id": product.id,
                "product_name": product.name,
                "price": product.price,
                "quantity": row.quantity if row.quantity is not None else 1,
            }
        )
        draft.items[index] = updated
        logger.info("catalog_product_selected", index=index, product_id=product.id)
        return ResolverOutcome(item=updated, index=index)

    def clear_product(self, draft: InvoiceDraft, index: int) -> ResolverOutcome:
        """Put row ``index`` back to unresolved; its quantity is kept."""
        check_index(draft, index)
        updated = draft.items[index].model_copy(
            update={"product_id": None, "product_name": "", "price": "0"}
        )
        draft.items[index] = updated
        logger.info("catalog_product_cleared", index=index)
        return ResolverOutcome(item=updated, index=index)

    def add_from_search(self, draft: InvoiceDraft, product: Product) -> ResolverOutcome:
        """Append a row for a product picked from the search results."""
        return self._append(draft, product, source="search")

    def scan_barcode(self, draft: InvoiceDraft, code: str) -> ResolverOutcome | None:
        """
        Append a row for the product whose barcode equals ``code``.

        Surrounding whitespace is ignored and a blank code does nothing.

        Raises:
            ProductNotFoundError: no product carries this barcode. The draft
                is left untouched.
        """
        code = code.strip()
        if not code:
            return None

        product = self._catalog.find_product_by_barcode(code)
        if product is None:
            logger.info("barcode_scan_missed", barcode=code)
            raise ProductNotFoundError(code, kind="barcode")

        return self._append(draft, product, source="barcode")

    def add_blank_item(self, draft: InvoiceDraft) -> ResolverOutcome:
        """Append an unresolved row."""
        item = LineItem.blank()
        draft.items.append(item)
        return ResolverOutcome(item=item, index=len(draft.items) - 1)

    def remove_item(self, draft: InvoiceDraft, index: int) -> bool:
        """
        Remove row ``index``.

        Returns False without touching the draft when it is the only row;
        a draft always keeps at least one row.
        """
        if len(draft.items) <= 1:
            return False
        check_index(draft, index)
        del draft.items[index]
        return True

    def select_customer(self, draft: InvoiceDraft, customer_id: str) -> Customer | None:
        """Copy id and name of a known customer; unknown ids are ignored."""
        customer = self._catalog.find_customer_by_id(customer_id)
        if customer is None:
            logger.debug("customer_select_ignored", customer_id=customer_id)
            return None
        draft.customer_id = customer.id
        draft.customer_name = customer.name
        return customer

    def _append(self, draft: InvoiceDraft, product: Product, source: str) -> ResolverOutcome:
        item = item_from_product(product)
        draft.items.append(item)
        logger.info(
            "product_appended",
            source=source,
            product_id=product.id,
            rows=len(draft.items),
        )
        return ResolverOutcome(
            item=item,
            index=len(draft.items) - 1,
            notification=product_added(product.name),
        )
