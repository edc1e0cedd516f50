"""
Domain exceptions for InvoiceDesk.

Three families matter to the editing flow:

- validation errors block a submission and are reported per field
- lookup misses leave the draft untouched and carry a notification
- submission errors keep the draft intact so the operator can retry

None of them is fatal; the editing session stays usable after any of them.
"""

from typing import Any

from invoicedesk.core.entities.notification import (
    Notification,
    product_not_found,
    submission_failed,
)
from invoicedesk.core.entities.validation import FieldError


class InvoiceDeskError(Exception):
    """Base exception for all InvoiceDesk errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        notification: Notification | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.notification = notification

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        payload: dict[str, Any] = {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }
        if self.notification is not None:
            payload["notification"] = self.notification.model_dump(mode="json")
        return payload


# Validation Exceptions
class ValidationError(InvoiceDeskError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class DraftValidationError(ValidationError):
    """The draft cannot be submitted; one entry per offending field."""

    def __init__(self, errors: list[FieldError]):
        first = errors[0] if errors else FieldError(field="draft", message="invalid")
        super().__init__(field=first.field, message=first.message)
        self.message = f"Invoice has {len(errors)} validation error(s)"
        self.args = (self.message,)
        self.errors = errors
        self.details = {"errors": [e.model_dump() for e in errors]}


# Lookup Exceptions
class LookupMissError(InvoiceDeskError):
    """A barcode or catalog id matched nothing."""

    pass


class ProductNotFoundError(LookupMissError):
    """No product for the given barcode or id."""

    def __init__(self, value: str, kind: str = "barcode"):
        super().__init__(
            f"No product found for {kind}: {value}",
            code="PRODUCT_NOT_FOUND",
            details={"kind": kind, "value": value},
            notification=product_not_found(),
        )


class CustomerNotFoundError(LookupMissError):
    """No customer with the given id."""

    def __init__(self, customer_id: str):
        super().__init__(
            f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
            details={"customer_id": customer_id},
        )


class DraftNotFoundError(LookupMissError):
    """No open editing session with the given id."""

    def __init__(self, draft_id: str):
        super().__init__(
            f"Invoice draft not found: {draft_id}",
            code="DRAFT_NOT_FOUND",
            details={"draft_id": draft_id},
        )


class ItemIndexError(LookupMissError):
    """Row index outside the current item list."""

    def __init__(self, index: int, count: int):
        super().__init__(
            f"Item index {index} out of range (draft has {count} items)",
            code="ITEM_NOT_FOUND",
            details={"index": index, "count": count},
        )


# Submission Exceptions
class SubmissionError(InvoiceDeskError):
    """The persistence boundary rejected or failed the submission."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invoice submission failed: {reason}",
            code="SUBMISSION_FAILED",
            details={"reason": reason},
            notification=submission_failed(),
        )


class SubmissionInProgressError(InvoiceDeskError):
    """A submission for this draft is already outstanding."""

    def __init__(self) -> None:
        super().__init__(
            "A submission for this invoice is already in progress",
            code="SUBMISSION_IN_PROGRESS",
        )


class DraftLockedError(InvoiceDeskError):
    """The draft cannot be edited while its submission is outstanding."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot {operation} while the invoice is being submitted",
            code="DRAFT_LOCKED",
            details={"operation": operation},
        )


class TooManyDraftsError(InvoiceDeskError):
    """Open editing sessions reached the configured limit."""

    def __init__(self, limit: int):
        super().__init__(
            f"Too many open invoice drafts (limit {limit})",
            code="TOO_MANY_DRAFTS",
            details={"limit": limit},
        )


# Storage Exceptions
class StorageError(InvoiceDeskError):
    """Base exception for storage operations."""

    pass


class TransactionNotFoundError(StorageError):
    """Transaction not found in storage."""

    def __init__(self, transaction_id: int):
        super().__init__(
            f"Transaction not found: {transaction_id}",
            code="TRANSACTION_NOT_FOUND",
            details={"transaction_id": transaction_id},
        )


class DuplicateCatalogEntryError(StorageError):
    """A product or customer with the same key already exists."""

    def __init__(self, entity: str, key: str):
        super().__init__(
            f"{entity} already exists: {key}",
            code="DUPLICATE_CATALOG_ENTRY",
            details={"entity": entity, "key": key},
        )
