"""The in-memory invoice being edited."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from invoicedesk.core.entities.line_item import LineItem


class PaymentType(str, Enum):
    """How the customer pays."""

    CASH = "cash"
    CREDIT = "credit"


class Currency(str, Enum):
    """Display currency. No conversion is ever performed."""

    TRY = "TRY"
    USD = "USD"


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.TRY: "₺",
    Currency.USD: "$",
}


def currency_symbol(currency: Currency | str) -> str:
    """Symbol shown next to amounts; unknown codes fall back to the lira sign."""
    try:
        return CURRENCY_SYMBOLS[Currency(currency)]
    except ValueError:
        return CURRENCY_SYMBOLS[Currency.TRY]


class InvoiceDraft(BaseModel):
    """A sales invoice that has not been submitted yet.

    Owned by exactly one editing session; never persisted as a draft.
    """

    customer_id: str | None = None
    customer_name: str = ""
    discount: str = "0"
    payment_type: PaymentType = PaymentType.CASH
    currency: Currency = Currency.TRY
    items: list[LineItem] = Field(default_factory=list)

    @field_validator("customer_id", mode="before")
    @classmethod
    def empty_customer_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v:
            return None
        return v

    @field_validator("discount", mode="before")
    @classmethod
    def discount_as_string(cls, v: object) -> object:
        if v is None:
            return "0"
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def new(
        cls,
        currency: Currency | str = Currency.TRY,
        payment_type: PaymentType | str = PaymentType.CASH,
    ) -> "InvoiceDraft":
        """Fresh draft as shown when the form opens: one blank row."""
        return cls(
            currency=Currency(currency),
            payment_type=PaymentType(payment_type),
            items=[LineItem.blank()],
        )
