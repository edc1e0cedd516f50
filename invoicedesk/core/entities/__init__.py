"""Core domain entities."""

from invoicedesk.core.entities.catalog import CatalogSnapshot, Customer, Product
from invoicedesk.core.entities.invoice_draft import (
    CURRENCY_SYMBOLS,
    Currency,
    InvoiceDraft,
    PaymentType,
    currency_symbol,
)
from invoicedesk.core.entities.line_item import (
    LineItem,
    parse_amount,
    parse_decimal,
    quantity_factor,
    recompute_total,
    to_decimal_string,
)
from invoicedesk.core.entities.notification import Notification, Severity
from invoicedesk.core.entities.transaction import (
    Transaction,
    TransactionItemRecord,
    TransactionRecord,
    TransactionSubmission,
)
from invoicedesk.core.entities.validation import FieldError

__all__ = [
    # Catalog
    "Product",
    "Customer",
    "CatalogSnapshot",
    # Draft
    "InvoiceDraft",
    "PaymentType",
    "Currency",
    "CURRENCY_SYMBOLS",
    "currency_symbol",
    "LineItem",
    "parse_amount",
    "parse_decimal",
    "quantity_factor",
    "recompute_total",
    "to_decimal_string",
    # Notifications
    "Notification",
    "Severity",
    # Persistence records
    "Transaction",
    "TransactionRecord",
    "TransactionItemRecord",
    "TransactionSubmission",
    # Validation
    "FieldError",
]
