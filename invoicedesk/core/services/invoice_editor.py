"""
Invoice editing session.

Holds one draft together with the transient form state around it (search
box, barcode input, scan panel, in-flight submission flag). Every method
that changes the draft re-runs the aggregator before returning, so
``totals`` always matches the items the caller sees next.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from invoicedesk.config import get_logger
from invoicedesk.core.entities.catalog import Customer, Product
from invoicedesk.core.entities.invoice_draft import (
    Currency,
    InvoiceDraft,
    PaymentType,
    currency_symbol,
)
from invoicedesk.core.entities.line_item import LineItem
from invoicedesk.core.exceptions import (
    DraftLockedError,
    ProductNotFoundError,
    SubmissionInProgressError,
    ValidationError,
)
from invoicedesk.core.services.acquisition_resolver import (
    AcquisitionResolver,
    ResolverOutcome,
    check_index,
)
from invoicedesk.core.services.catalog_index import CatalogIndex
from invoicedesk.core.services.invoice_aggregator import DraftTotals, InvoiceAggregator

logger = get_logger(__name__)

EDITABLE_ITEM_FIELDS = frozenset({"quantity", "price", "product_name"})


class InvoiceEditor:
    """One operator's editing session over a single draft."""

    def __init__(
        self,
        catalog: CatalogIndex,
        draft: InvoiceDraft | None = None,
        default_currency: Currency | str = Currency.TRY,
        default_payment_type: PaymentType | str = PaymentType.CASH,
    ) -> None:
        self._catalog = catalog
        self._resolver = AcquisitionResolver(catalog)
        self._aggregator = InvoiceAggregator()
        self._default_currency = Currency(default_currency)
        self._default_payment_type = PaymentType(default_payment_type)

        self.draft = draft or self._fresh_draft()
        self.search_query = ""
        self.barcode_input = ""
        self.barcode_panel_open = False
        self.selected_item_index: int | None = None
        self.submitting = False
        self.totals: DraftTotals = self._aggregator.apply(self.draft)

    # -- state helpers -------------------------------------------------

    def _fresh_draft(self) -> InvoiceDraft:
        return InvoiceDraft.new(
            currency=self._default_currency,
            payment_type=self._default_payment_type,
        )

    def guard(self, operation: str) -> None:
        """Raise DraftLockedError while a submission is outstanding."""
        if self.submitting:
            raise DraftLockedError(operation)

    def _recompute(self) -> DraftTotals:
        self.totals = self._aggregator.apply(self.draft)
        return self.totals

    @property
    def currency_symbol(self) -> str:
        return currency_symbol(self.draft.currency)

    @property
    def search_results(self) -> list[Product]:
        """Products shown under the search box (first few matches)."""
        return self._catalog.search_for_display(self.search_query)

    # -- invoice header ------------------------------------------------

    def set_customer_name(self, name: str) -> None:
        self.guard("change the customer")
        self.draft.customer_name = name

    def select_customer(self, customer_id: str) -> Customer | None:
        self.guard("change the customer")
        return self._resolver.select_customer(self.draft, customer_id)

    def set_discount(self, discount: str) -> DraftTotals:
        self.guard("change the discount")
        self.draft.discount = discount if discount is not None else "0"
        return self._recompute()

    def set_currency(self, currency: Currency | str) -> None:
        self.guard("change the currency")
        self.draft.currency = Currency(currency)

    def set_payment_type(self, payment_type: PaymentType | str) -> None:
        self.guard("change the payment type")
        self.draft.payment_type = PaymentType(payment_type)

    # -- rows ----------------------------------------------------------

    def add_blank_item(self) -> ResolverOutcome:
        self.guard("add an item")
        outcome = self._resolver.add_blank_item(self.draft)
        self._recompute()
        return outcome

    def update_item(self, index: int, changes: dict[str, Any]) -> LineItem:
        """
        Edit quantity, price or product name of row ``index``.

        The line total is derived and cannot be set directly.
        """
        self.guard("edit an item")
        check_index(self.draft, index)
        unknown = set(changes) - EDITABLE_ITEM_FIELDS
        if "total" in unknown:
            raise ValidationError(
                f"items.{index}.total", "Line total is derived and cannot be edited"
            )
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationError(f"items.{index}.{field}", "Field cannot be edited")

        row = self.draft.items[index]
        try:
            updated = LineItem.model_validate({**row.model_dump(), **changes})
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "item"
            raise ValidationError(f"items.{index}.{field}", error["msg"]) from e
        self.draft.items[index] = updated
        self._recompute()
        return self.draft.items[index]

    def select_product(self, index: int, product_id: str) -> ResolverOutcome | None:
        self.guard("select a product")
        outcome = self._resolver.select_existing(self.draft, index, product_id)
        self._recompute()
        if outcome is not None:
            outcome.item = self.draft.items[outcome.index]
        return outcome

    def clear_product(self, index: int) -> ResolverOutcome:
        self.guard("clear a product")
        outcome = self._resolver.clear_product(self.draft, index)
        self._recompute()
        outcome.item = self.draft.items[outcome.index]
        return outcome

    def remove_item(self, index: int) -> bool:
        self.guard("remove an item")
        removed = self._resolver.remove_item(self.draft, index)
        if removed:
            if self.selected_item_index is not None and self.selected_item_index >= len(
                self.draft.items
            ):
                self.selected_item_index = None
            self._recompute()
        return removed

    # -- search --------------------------------------------------------

    def set_search_query(self, query: str) -> list[Product]:
        self.search_query = query
        return self.search_results

    def add_from_search(self, product_id: str) -> ResolverOutcome:
        """
        Append the picked search result and clear the search box.

        Raises:
            ProductNotFoundError: the id is no longer in the catalog.
        """
        self.guard("add an item")
        product = self._catalog.find_product_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, kind="id")

        outcome = self._resolver.add_from_search(self.draft, product)
        self.search_query = ""
        self.selected_item_index = None
        self._recompute()
        outcome.item = self.draft.items[outcome.index]
        return outcome

    # -- barcode -------------------------------------------------------

    def open_barcode_panel(self) -> None:
        self.barcode_panel_open = True

    def close_barcode_panel(self) -> None:
        self.barcode_panel_open = False

    def set_barcode_input(self, code: str) -> None:
        self.barcode_input = code

    def scan_barcode(self, code: str | None = None) -> ResolverOutcome | None:
        """
        Resolve the barcode input (or ``code``) and append the product.

        On success the input is cleared and the scan panel closes. On a miss
        the input is kept so the operator can correct it, and
        ProductNotFoundError propagates.
        """
        self.guard("scan a barcode")
        if code is not None:
            self.barcode_input = code

        outcome = self._resolver.scan_barcode(self.draft, self.barcode_input)
        if outcome is None:
            return None

        self.barcode_input = ""
        self.barcode_panel_open = False
        self._recompute()
        outcome.item = self.draft.items[outcome.index]
        return outcome

    # -- lifecycle -----------------------------------------------------

    def begin_submission(self) -> None:
        """Mark a submission as outstanding; at most one at a time."""
        if self.submitting:
            raise SubmissionInProgressError()
        self.submitting = True

    def finish_submission(self, success: bool) -> None:
        """Unlock the draft; a successful submission discards it."""
        self.submitting = False
        if success:
            self.reset()

    def reset(self) -> None:
        """Discard the draft and all form state."""
        self.draft = self._fresh_draft()
        self.search_query = ""
        self.barcode_input = ""
        self.barcode_panel_open = False
        self.selected_item_index = None
        self._recompute()
        logger.debug("invoice_draft_reset")
