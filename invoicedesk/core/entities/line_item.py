"""Invoice line item and the arithmetic that derives its total."""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, field_validator

ZERO = Decimal(0)


def parse_decimal(value: object) -> Decimal:
    """Parse a user-entered amount; anything unusable counts as zero.

    Never raises. Empty strings, garbage, NaN and infinities all yield 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def parse_amount(value: object) -> Decimal | None:
    """Strict parse for submission-time checks: None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def quantity_factor(quantity: object) -> Decimal:
    """Quantity used for multiplication: missing or non-positive becomes 0."""
    factor = parse_decimal(quantity)
    return factor if factor > 0 else ZERO


def to_decimal_string(value: Decimal) -> str:
    """Render a Decimal in plain notation (no exponent, no negative zero)."""
    if not value.is_finite():
        return "0"
    return format(value + 0, "f")


class LineItem(BaseModel):
    """One invoice row.

    ``product_id`` is None while the row is waiting for a product to be
    picked. ``quantity`` may hold any transient value while the operator
    is typing; it is only checked at submission. ``total`` is derived and
    is overwritten by every recomputation.
    """

    product_id: str | None = None
    product_name: str = ""
    quantity: int | float | None = 1
    price: str = "0"
    total: str = "0"

    @field_validator("product_id", mode="before")
    @classmethod
    def empty_id_is_unresolved(cls, v: object) -> object:
        if isinstance(v, str) and not v:
            return None
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_as_string(cls, v: object) -> object:
        if v is None:
            return "0"
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def blank(cls) -> "LineItem":
        """An unresolved row as created by the "add item" control."""
        return cls(product_id=None, product_name="", quantity=1, price="0", total="0")

    @property
    def is_resolved(self) -> bool:
        return self.product_id is not None

    @property
    def amount(self) -> Decimal:
        """price * quantity with the zero fallbacks applied."""
        return parse_decimal(self.price) * quantity_factor(self.quantity)


def recompute_total(item: LineItem) -> LineItem:
    """Return a copy of ``item`` whose total equals price * quantity."""
    return item.model_copy(update={"total": to_decimal_string(item.amount)})
