"""Catalog entities supplied by the catalog source (read-only to the core)."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A sellable product."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sku: str
    barcode: str | None = None
    price: str = "0"  # decimal string
    quantity: int = 0  # stock count, informational only
    created_at: datetime | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_as_string(cls, v: object) -> object:
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("barcode", mode="before")
    @classmethod
    def blank_barcode_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Customer(BaseModel):
    """A customer that can be attached to an invoice."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    phone: str | None = None
    created_at: datetime | None = None


class CatalogSnapshot(BaseModel):
    """Immutable point-in-time view of products and customers.

    Order is preserved exactly as the catalog source returned it.
    """

    model_config = ConfigDict(frozen=True)

    products: tuple[Product, ...] = Field(default_factory=tuple)
    customers: tuple[Customer, ...] = Field(default_factory=tuple)
    loaded_at: datetime = Field(default_factory=datetime.utcnow)
