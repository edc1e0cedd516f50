"""
Request DTOs for API endpoints.

Pydantic models for request validation and documentation.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from invoicedesk.core.entities.invoice_draft import Currency, PaymentType
from invoicedesk.core.entities.transaction import (
    TransactionItemRecord,
    TransactionRecord,
)


def _amount_as_string(v: object) -> object:
    if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
        return str(v)
    return v


# --- Catalog ---


class CreateProductRequest(BaseModel):
    """Request to add a product to the catalog."""

    id: str | None = Field(default=None, description="Product ID (generated when omitted)")
    name: str = Field(..., min_length=1, description="Product name")
    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    barcode: str | None = Field(default=None, description="Barcode, if any")
    price: str = Field(default="0", description="Unit price as a decimal string")
    quantity: int = Field(default=0, ge=0, description="Units in stock")

    @field_validator("price", mode="before")
    @classmethod
    def price_as_string(cls, v: object) -> object:
        return _amount_as_string(v)


class CreateCustomerRequest(BaseModel):
    """Request to add a customer to the catalog."""

    name: str = Field(..., min_length=1, description="Customer name")
    phone: str | None = Field(default=None, description="Contact phone")


# --- Invoice drafts ---


class OpenDraftRequest(BaseModel):
    """Request to open an invoice editing session."""

    currency: Currency | None = Field(default=None, description="Defaults to settings")
    payment_type: PaymentType | None = Field(default=None, description="Defaults to settings")


class UpdateDraftRequest(BaseModel):
    """Partial update of the invoice header. Omitted fields are unchanged."""

    customer_name: str | None = None
    discount: str | None = None
    payment_type: PaymentType | None = None
    currency: Currency | None = None

    @field_validator("discount", mode="before")
    @classmethod
    def discount_as_string(cls, v: object) -> object:
        return _amount_as_string(v)


class SelectCustomerRequest(BaseModel):
    """Pick an existing customer for the invoice."""

    customer_id: str = Field(..., description="Customer ID from the catalog")


class UpdateItemRequest(BaseModel):
    """Partial update of one row. The line total cannot be set."""

    quantity: int | float | None = None
    price: str | None = None
    product_name: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_as_string(cls, v: object) -> object:
        return _amount_as_string(v)


class SelectProductRequest(BaseModel):
    """Point a row at a catalog product."""

    product_id: str = Field(..., description="Product ID from the catalog")


class AddFromSearchRequest(BaseModel):
    """Append the product picked from search results."""

    product_id: str = Field(..., description="Product ID from the search results")


class BarcodePanelRequest(BaseModel):
    """Open/close the scan panel and set the barcode input."""

    open: bool = Field(default=True, description="Whether the scan panel is shown")
    barcode: str | None = Field(default=None, description="Text in the barcode input")


class ScanBarcodeRequest(BaseModel):
    """Scan a barcode; omitted means use the current barcode input."""

    barcode: str | None = Field(default=None, description="Scanned code")


# --- Transactions ---


class CreateTransactionRequest(BaseModel):
    """Raw persistence request: header plus items."""

    transaction: TransactionRecord
    items: list[TransactionItemRecord] = Field(..., min_length=1)
