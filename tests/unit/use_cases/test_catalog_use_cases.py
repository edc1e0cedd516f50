"""Tests for adding products and customers."""

import pytest

from invoicedesk.application.dto.requests import CreateCustomerRequest, CreateProductRequest
from invoicedesk.application.services import get_catalog_index
from invoicedesk.application.use_cases import CreateCustomerUseCase, CreateProductUseCase
from invoicedesk.core.exceptions import ValidationError


class TestCreateCustomerUseCase:
    async def test_creates_and_refreshes_index(self, catalog_source):
        index = await get_catalog_index(catalog_source)
        assert len(index.customers) == 2

        customer = await CreateCustomerUseCase(catalog_source).execute(
            CreateCustomerRequest(name="  Initech ", phone="555")
        )

        assert customer.name == "Initech"
        assert len(customer.id) == 32
        assert index.find_customer_by_id(customer.id).name == "Initech"


class TestCreateProductUseCase:
    async def test_creates_and_becomes_scannable(self, catalog_source):
        index = await get_catalog_index(catalog_source)

        product = await CreateProductUseCase(catalog_source).execute(
            CreateProductRequest(id="p9", name="Tea", sku="TEA-1", barcode=" 900 ", price=1.25)
        )

        assert product.price == "1.25"
        assert product.barcode == "900"
        assert index.find_product_by_barcode("900").id == "p9"

    async def test_generated_id(self, catalog_source):
        product = await CreateProductUseCase(catalog_source).execute(
            CreateProductRequest(name="Tea", sku="TEA-2")
        )
        assert product.id
        assert product.price == "0"

    @pytest.mark.parametrize("price", ["-1", "abc"])
    async def test_invalid_price(self, catalog_source, price):
        with pytest.raises(ValidationError):
            await CreateProductUseCase(catalog_source).execute(
                CreateProductRequest(name="Tea", sku="TEA-3", price=price)
            )
        assert all(p.sku != "TEA-3" for p in catalog_source.products)
