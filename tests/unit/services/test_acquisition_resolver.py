"""Tests for catalog, search and barcode item acquisition."""

import pytest

from invoicedesk.core.entities import InvoiceDraft, LineItem
from invoicedesk.core.exceptions import ItemIndexError, ProductNotFoundError
from invoicedesk.core.services import AcquisitionResolver, CatalogIndex


@pytest.fixture
def resolver(catalog: CatalogIndex) -> AcquisitionResolver:
    return AcquisitionResolver(catalog)


@pytest.fixture
def draft() -> InvoiceDraft:
    return InvoiceDraft.new()


class TestSelectExisting:
    def test_fills_product_fields(self, resolver, draft):
        outcome = resolver.select_existing(draft, 0, "p2")
        item = draft.items[0]
        assert outcome.index == 0
        assert item.product_id == "p2"
        assert item.product_name == "Widget"
        assert item.price == "10"
        assert item.quantity == 1

    def test_keeps_existing_quantity(self, resolver, draft):
        draft.items[0] = LineItem(quantity=4)
        resolver.select_existing(draft, 0, "p2")
        assert draft.items[0].quantity == 4

    def test_unknown_id_is_ignored(self, resolver, draft):
        assert resolver.select_existing(draft, 0, "nope") is None
        assert draft.items[0].product_id is None

    def test_bad_index(self, resolver, draft):
        with pytest.raises(ItemIndexError):
            resolver.select_existing(draft, 3, "p2")


class TestClearProduct:
    def test_row_becomes_unresolved(self, resolver, draft):
        draft.items[0] = LineItem(product_id="p2", product_name="Widget", quantity=3, price="10")

        outcome = resolver.clear_product(draft, 0)

        assert outcome.index == 0
        assert draft.items[0].product_id is None
        assert draft.items[0].product_name == ""
        assert draft.items[0].price == "0"
        assert draft.items[0].quantity == 3
        assert draft.items[0].is_resolved is False

    def test_cleared_row_can_be_selected_again(self, resolver, draft):
        resolver.select_existing(draft, 0, "p2")
        resolver.clear_product(draft, 0)
        resolver.select_existing(draft, 0, "p3")
        assert draft.items[0].product_id == "p3"
        assert draft.items[0].price == "5"

    def test_bad_index(self, resolver, draft):
        with pytest.raises(ItemIndexError):
            resolver.clear_product(draft, 1)


class TestAddFromSearch:
    def test_appends_row(self, resolver, draft, catalog):
        outcome = resolver.add_from_search(draft, catalog.find_product_by_id("p4"))
        assert len(draft.items) == 2
        assert outcome.index == 1
        assert outcome.item.product_id == "p4"
        assert outcome.item.quantity == 1
        assert outcome.item.total == "2.75"
        assert outcome.notification.title == "Product added"
        assert "Cola Zero" in outcome.notification.description


class TestScanBarcode:
    def test_hit_appends_row(self, resolver, draft):
        outcome = resolver.scan_barcode(draft, "123")
        assert len(draft.items) == 2
        assert draft.items[1].product_id == "p1"
        assert draft.items[1].price == "2.50"
        assert outcome.notification is not None

    def test_whitespace_is_trimmed(self, resolver, draft):
        resolver.scan_barcode(draft, "  456\n")
        assert draft.items[-1].product_id == "p2"

    def test_blank_is_a_no_op(self, resolver, draft):
        assert resolver.scan_barcode(draft, "   ") is None
        assert len(draft.items) == 1

    def test_miss_raises_and_leaves_draft(self, resolver, draft):
        before = [i.model_copy() for i in draft.items]
        with pytest.raises(ProductNotFoundError) as exc_info:
            resolver.scan_barcode(draft, "999")
        assert draft.items == before
        assert exc_info.value.notification.title == "Product not found"

    def test_repeat_scans_are_never_merged(self, resolver, draft):
        resolver.scan_barcode(draft, "123")
        resolver.scan_barcode(draft, "123")
        assert [i.product_id for i in draft.items] == [None, "p1", "p1"]
        assert all(i.quantity == 1 for i in draft.items[1:])


class TestRows:
    def test_add_blank(self, resolver, draft):
        outcome = resolver.add_blank_item(draft)
        assert outcome.index == 1
        assert not draft.items[1].is_resolved

    def test_remove(self, resolver, draft):
        resolver.add_blank_item(draft)
        assert resolver.remove_item(draft, 0) is True
        assert len(draft.items) == 1

    def test_last_row_is_kept(self, resolver, draft):
        assert resolver.remove_item(draft, 0) is False
        assert len(draft.items) == 1

    def test_remove_bad_index(self, resolver, draft):
        resolver.add_blank_item(draft)
        with pytest.raises(ItemIndexError):
            resolver.remove_item(draft, 5)


class TestSelectCustomer:
    def test_known_customer(self, resolver, draft):
        customer = resolver.select_customer(draft, "c1")
        assert customer.name == "Acme Ltd"
        assert draft.customer_id == "c1"
        assert draft.customer_name == "Acme Ltd"

    def test_unknown_customer_is_ignored(self, resolver, draft):
        draft.customer_name = "Walk-in"
        assert resolver.select_customer(draft, "c9") is None
        assert draft.customer_id is None
        assert draft.customer_name == "Walk-in"
