"""
Response DTOs for API endpoints.

Pydantic models for response serialization and documentation.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from invoicedesk.core.entities.invoice_draft import Currency, PaymentType
from invoicedesk.core.entities.notification import Notification
from invoicedesk.core.entities.validation import FieldError


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    open_drafts: int | None = None
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error

    Validation failures list every offending field in ``errors``; lookup
    misses and submission failures carry the ``notification`` to display.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    errors: list[FieldError] | None = Field(default=None, description="Field-level errors")
    notification: Notification | None = Field(default=None, description="Toast to show")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Catalog ---


class ProductResponse(BaseModel):
    """Product response DTO."""

    id: str
    name: str
    sku: str
    barcode: str | None = None
    price: str
    quantity: int


class ProductListResponse(BaseModel):
    """List of products."""

    products: list[ProductResponse]
    total: int


class CustomerResponse(BaseModel):
    """Customer response DTO."""

    id: str
    name: str
    phone: str | None = None


class CustomerListResponse(BaseModel):
    """List of customers."""

    customers: list[CustomerResponse]
    total: int


# --- Invoice drafts ---


class LineItemResponse(BaseModel):
    """One draft row."""

    index: int
    product_id: str | None
    product_name: str
    quantity: int | float | None
    price: str
    total: str
    resolved: bool


class DraftResponse(BaseModel):
    """Full state of an editing session after an operation."""

    id: str
    customer_id: str | None
    customer_name: str
    discount: str
    payment_type: PaymentType
    currency: Currency
    currency_symbol: str
    items: list[LineItemResponse]
    subtotal: str
    grand_total: str
    search_query: str
    search_results: list[ProductResponse] = Field(default_factory=list)
    barcode_input: str
    barcode_panel_open: bool
    submitting: bool
    notification: Notification | None = None
    created_at: datetime


# --- Transactions ---


class TransactionItemResponse(BaseModel):
    """Persisted transaction item."""

    id: int | None
    product_id: str
    product_name: str
    quantity: int
    price: str
    total: str


class TransactionResponse(BaseModel):
    """Persisted transaction with items."""

    id: int
    customer_id: str | None
    customer_name: str
    total: str
    discount: str
    tax: str
    payment_type: PaymentType
    currency: Currency
    status: str
    transaction_type: str
    items: list[TransactionItemResponse]
    created_at: datetime


class TransactionListResponse(BaseModel):
    """Paginated transactions."""

    transactions: list[TransactionResponse]
    total: int


class SubmitDraftResponse(BaseModel):
    """Result of submitting a draft; the session is closed afterwards."""

    transaction: TransactionResponse
    notification: Notification
