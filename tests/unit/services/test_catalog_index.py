"""Tests for the in-memory catalog index."""

from invoicedesk.core.entities import CatalogSnapshot, Customer, Product
from invoicedesk.core.services import CatalogIndex


def _catalog_of(count: int) -> CatalogIndex:
    products = tuple(
        Product(id=f"p{i}", name=f"Cable {i}", sku=f"CBL-{i}", price="1") for i in range(count)
    )
    return CatalogIndex(CatalogSnapshot(products=products))


class TestFindProduct:
    def test_by_id(self, catalog: CatalogIndex):
        assert catalog.find_product_by_id("p2").name == "Widget"

    def test_by_unknown_id(self, catalog: CatalogIndex):
        assert catalog.find_product_by_id("nope") is None

    def test_by_barcode_is_exact(self, catalog: CatalogIndex):
        # "123" is a prefix of "1234"; only the exact match counts
        assert catalog.find_product_by_barcode("123").id == "p1"
        assert catalog.find_product_by_barcode("1234").id == "p4"
        assert catalog.find_product_by_barcode("12") is None

    def test_by_empty_barcode(self, catalog: CatalogIndex):
        assert catalog.find_product_by_barcode("") is None

    def test_duplicate_barcode_first_wins(self):
        catalog = CatalogIndex(
            CatalogSnapshot(
                products=(
                    Product(id="a", name="A", sku="A", barcode="777"),
                    Product(id="b", name="B", sku="B", barcode="777"),
                )
            )
        )
        assert catalog.find_product_by_barcode("777").id == "a"


class TestSearch:
    def test_empty_query_matches_nothing(self, catalog: CatalogIndex):
        assert catalog.search("") == []

    def test_name_is_case_insensitive(self, catalog: CatalogIndex):
        assert [p.id for p in catalog.search("cola")] == ["p1", "p4"]

    def test_sku_is_case_insensitive(self, catalog: CatalogIndex):
        assert [p.id for p in catalog.search("wid-0")] == ["p2"]

    def test_barcode_containment(self, catalog: CatalogIndex):
        assert [p.id for p in catalog.search("23")] == ["p1", "p4"]

    def test_product_without_barcode_only_matches_on_text(self, catalog: CatalogIndex):
        assert [p.id for p in catalog.search("gadget")] == ["p3"]

    def test_display_is_capped_at_five(self):
        catalog = _catalog_of(8)
        assert len(catalog.search("cable")) == 8
        shown = catalog.search_for_display("cable")
        assert [p.id for p in shown] == ["p0", "p1", "p2", "p3", "p4"]

    def test_display_custom_limit(self):
        catalog = _catalog_of(8)
        assert len(catalog.search_for_display("cable", limit=2)) == 2


class TestCustomersAndRefresh:
    def test_find_customer(self, catalog: CatalogIndex):
        assert catalog.find_customer_by_id("c1").name == "Acme Ltd"
        assert catalog.find_customer_by_id("c9") is None

    def test_refresh_swaps_snapshot(self, catalog: CatalogIndex):
        new_snapshot = CatalogSnapshot(
            products=(Product(id="n1", name="New", sku="N1", barcode="900"),),
            customers=(Customer(id="c3", name="Initech"),),
        )
        catalog.refresh(new_snapshot)
        assert catalog.snapshot is new_snapshot
        assert catalog.find_product_by_barcode("123") is None
        assert catalog.find_product_by_barcode("900").id == "n1"
        assert [c.id for c in catalog.customers] == ["c3"]

    def test_empty_index(self):
        catalog = CatalogIndex()
        assert catalog.products == ()
        assert catalog.search("x") == []
