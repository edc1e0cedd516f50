"""Tests for the invoice draft entity."""

from invoicedesk.core.entities.invoice_draft import (
    Currency,
    InvoiceDraft,
    PaymentType,
    currency_symbol,
)


class TestInvoiceDraft:
    def test_new_has_one_blank_row(self):
        draft = InvoiceDraft.new()
        assert len(draft.items) == 1
        assert draft.items[0].product_id is None

    def test_new_defaults(self):
        draft = InvoiceDraft.new()
        assert draft.customer_id is None
        assert draft.customer_name == ""
        assert draft.discount == "0"
        assert draft.currency == Currency.TRY
        assert draft.payment_type == PaymentType.CASH

    def test_new_with_currency_and_payment(self):
        draft = InvoiceDraft.new(currency="USD", payment_type="credit")
        assert draft.currency == Currency.USD
        assert draft.payment_type == PaymentType.CREDIT

    def test_empty_customer_id_is_none(self):
        draft = InvoiceDraft(customer_id="")
        assert draft.customer_id is None

    def test_numeric_discount_is_stored_as_string(self):
        draft = InvoiceDraft(discount=3)
        assert draft.discount == "3"

    def test_missing_discount_is_zero(self):
        draft = InvoiceDraft(discount=None)
        assert draft.discount == "0"


class TestCurrencySymbol:
    def test_lira(self):
        assert currency_symbol(Currency.TRY) == "₺"

    def test_dollar(self):
        assert currency_symbol("USD") == "$"

    def test_unknown_falls_back_to_lira(self):
        assert currency_symbol("EUR") == "₺"
