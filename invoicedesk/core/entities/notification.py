"""User-facing notifications emitted by editing operations."""

from enum import Enum

from pydantic import BaseModel


class Severity(str, Enum):
    """How a notification should be presented."""

    INFO = "info"
    ERROR = "error"


class Notification(BaseModel):
    """A toast-style message; rendering and localization happen elsewhere."""

    title: str
    description: str
    severity: Severity = Severity.INFO


def product_added(product_name: str) -> Notification:
    return Notification(
        title="Product added",
        description=f"{product_name} was added to the invoice",
    )


def product_not_found() -> Notification:
    return Notification(
        title="Product not found",
        description="No product matches this barcode",
        severity=Severity.ERROR,
    )


def submission_failed() -> Notification:
    return Notification(
        title="Error",
        description="Failed to create the invoice",
        severity=Severity.ERROR,
    )


def invoice_created() -> Notification:
    return Notification(
        title="Success",
        description="The invoice was created successfully",
    )
