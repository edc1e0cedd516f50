"""Tests for invoice totals."""

from decimal import Decimal

from invoicedesk.core.entities import InvoiceDraft, LineItem
from invoicedesk.core.services import InvoiceAggregator
from invoicedesk.core.services.invoice_aggregator import compute_grand_total


def _draft(*items: LineItem, discount: str = "0") -> InvoiceDraft:
    return InvoiceDraft(customer_name="Acme", discount=discount, items=list(items))


class TestInvoiceAggregator:
    def test_subtotal_and_grand_total(self):
        draft = _draft(
            LineItem(product_id="p2", quantity=2, price="10"),
            LineItem(product_id="p3", quantity=1, price="5"),
            discount="3",
        )
        totals = InvoiceAggregator().recompute(draft)
        assert [i.total for i in totals.items] == ["20", "5"]
        assert totals.subtotal == Decimal(25)
        assert totals.grand_total == Decimal(22)
        assert totals.as_strings() == {"subtotal": "25", "discount": "3", "grand_total": "22"}

    def test_grand_total_is_floored_at_zero(self):
        draft = _draft(LineItem(product_id="p3", quantity=1, price="5"), discount="100")
        totals = InvoiceAggregator().recompute(draft)
        assert totals.subtotal == Decimal(5)
        assert totals.grand_total == 0

    def test_invalid_discount_counts_as_zero(self):
        draft = _draft(LineItem(product_id="p3", quantity=1, price="5"), discount="abc")
        assert InvoiceAggregator().recompute(draft).grand_total == Decimal(5)

    def test_invalid_price_and_quantity_contribute_zero(self):
        draft = _draft(
            LineItem(product_id="p1", quantity=None, price="10"),
            LineItem(product_id="p2", quantity=2, price=""),
            LineItem(product_id="p3", quantity=-1, price="10"),
        )
        totals = InvoiceAggregator().recompute(draft)
        assert totals.subtotal == 0
        assert [i.total for i in totals.items] == ["0", "0", "0"]

    def test_recompute_is_pure_and_idempotent(self):
        draft = _draft(LineItem(product_id="p2", quantity=2, price="10", total="stale"))
        aggregator = InvoiceAggregator()
        first = aggregator.recompute(draft)
        second = aggregator.recompute(draft)
        assert first == second
        assert draft.items[0].total == "stale"

    def test_apply_writes_line_totals_back(self):
        draft = _draft(LineItem(product_id="p2", quantity=3, price="10", total="stale"))
        InvoiceAggregator().apply(draft)
        assert draft.items[0].total == "30"

    def test_compute_grand_total(self):
        assert compute_grand_total(Decimal(10), Decimal(4)) == Decimal(6)
        assert compute_grand_total(Decimal(10), Decimal(40)) == 0
