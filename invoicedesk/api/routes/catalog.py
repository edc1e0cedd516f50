"""Product and customer catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from invoicedesk.api.dependencies import (
    get_catalog,
    get_create_customer_use_case,
    get_create_product_use_case,
)
from invoicedesk.application.dto.requests import CreateCustomerRequest, CreateProductRequest
from invoicedesk.application.dto.responses import (
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
)
from invoicedesk.application.use_cases import CreateCustomerUseCase, CreateProductUseCase
from invoicedesk.core.entities.catalog import Customer, Product
from invoicedesk.core.exceptions import CustomerNotFoundError, ProductNotFoundError
from invoicedesk.core.services import CatalogIndex

router = APIRouter(prefix="/api", tags=["catalog"])


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        sku=product.sku,
        barcode=product.barcode,
        price=product.price,
        quantity=product.quantity,
    )


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(id=customer.id, name=customer.name, phone=customer.phone)


@router.get("/products", response_model=ProductListResponse)
async def list_products(catalog: CatalogIndex = Depends(get_catalog)) -> ProductListResponse:
    """All products in catalog order."""
    products = [product_to_response(p) for p in catalog.products]
    return ProductListResponse(products=products, total=len(products))


@router.get("/products/search", response_model=ProductListResponse)
async def search_products(
    q: str = Query(default="", description="Name, SKU or barcode fragment"),
    catalog: CatalogIndex = Depends(get_catalog),
) -> ProductListResponse:
    """
    Search products as the search panel does.

    ``products`` holds the first few matches; ``total`` counts all of them.
    """
    matches = catalog.search(q)
    return ProductListResponse(
        products=[product_to_response(p) for p in matches[: catalog.display_limit]],
        total=len(matches),
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    catalog: CatalogIndex = Depends(get_catalog),
) -> ProductResponse:
    """Get a product by ID."""
    product = catalog.find_product_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id, kind="id")
    return product_to_response(product)


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    """Add a product to the catalog."""
    return product_to_response(await use_case.execute(request))


@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(catalog: CatalogIndex = Depends(get_catalog)) -> CustomerListResponse:
    """All customers in catalog order."""
    customers = [customer_to_response(c) for c in catalog.customers]
    return CustomerListResponse(customers=customers, total=len(customers))


@router.get(
    "/customers/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: str,
    catalog: CatalogIndex = Depends(get_catalog),
) -> CustomerResponse:
    """Get a customer by ID."""
    customer = catalog.find_customer_by_id(customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return customer_to_response(customer)


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_customer(
    request: CreateCustomerRequest,
    use_case: CreateCustomerUseCase = Depends(get_create_customer_use_case),
) -> CustomerResponse:
    """Add a customer; open drafts can pick it right away."""
    return customer_to_response(await use_case.execute(request))
