"""Derived totals for an invoice draft."""

from dataclasses import dataclass
from decimal import Decimal

from invoicedesk.core.entities.invoice_draft import InvoiceDraft
from invoicedesk.core.entities.line_item import (
    ZERO,
    LineItem,
    parse_decimal,
    recompute_total,
    to_decimal_string,
)


@dataclass(frozen=True)
class DraftTotals:
    """Line items with fresh totals plus the invoice-level figures."""

    items: list[LineItem]
    subtotal: Decimal
    discount: Decimal
    grand_total: Decimal

    def as_strings(self) -> dict[str, str]:
        return {
            "subtotal": to_decimal_string(self.subtotal),
            "discount": to_decimal_string(self.discount),
            "grand_total": to_decimal_string(self.grand_total),
        }


def compute_subtotal(items: list[LineItem]) -> Decimal:
    """Sum of price * quantity over all rows, zero fallbacks applied."""
    return sum((item.amount for item in items), ZERO)


def compute_grand_total(subtotal: Decimal, discount: Decimal) -> Decimal:
    """subtotal - discount, floored at zero."""
    return max(ZERO, subtotal - discount)


class InvoiceAggregator:
    """
    Recomputes line totals, subtotal and grand total.

    ``recompute`` is pure and idempotent: it never touches its input and
    returns the same result for the same draft. ``apply`` writes the
    refreshed line totals back and should run after every mutation.
    """

    def recompute(self, draft: InvoiceDraft) -> DraftTotals:
        items = [recompute_total(item) for item in draft.items]
        subtotal = compute_subtotal(items)
        discount = parse_decimal(draft.discount)
        return DraftTotals(
            items=items,
            subtotal=subtotal,
            discount=discount,
            grand_total=compute_grand_total(subtotal, discount),
        )

    def apply(self, draft: InvoiceDraft) -> DraftTotals:
        totals = self.recompute(draft)
        draft.items = list(totals.items)
        return totals
