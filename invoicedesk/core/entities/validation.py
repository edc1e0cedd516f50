"""Field-level validation results."""

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single required-field or minimum-value violation.

    ``field`` is a dotted path such as ``customer_name`` or
    ``items.2.quantity``.
    """

    field: str
    message: str
