"""Records handed to the persistence boundary on submission."""

from datetime import datetime

from pydantic import BaseModel, Field

from invoicedesk.core.entities.invoice_draft import Currency, PaymentType


class TransactionRecord(BaseModel):
    """Header of a completed sale."""

    customer_id: str | None = None
    customer_name: str = Field(..., min_length=1)
    total: str
    discount: str = "0"
    tax: str = "0"
    payment_type: PaymentType = PaymentType.CASH
    currency: Currency = Currency.TRY
    status: str = "completed"
    transaction_type: str = "sale"


class TransactionItemRecord(BaseModel):
    """One sold line."""

    id: int | None = None
    transaction_id: int | None = None
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: str
    total: str


class TransactionSubmission(BaseModel):
    """Header plus items, persisted as one atomic request."""

    transaction: TransactionRecord
    items: list[TransactionItemRecord] = Field(..., min_length=1)


class Transaction(TransactionRecord):
    """A persisted transaction with its items."""

    id: int | None = None
    items: list[TransactionItemRecord] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
