"""Core domain services."""

from invoicedesk.core.services.acquisition_resolver import (
    AcquisitionResolver,
    ResolverOutcome,
)
from invoicedesk.core.services.catalog_index import DISPLAY_LIMIT, CatalogIndex
from invoicedesk.core.services.invoice_aggregator import DraftTotals, InvoiceAggregator
from invoicedesk.core.services.invoice_editor import InvoiceEditor
from invoicedesk.core.services.submission_assembler import SubmissionAssembler

__all__ = [
    "AcquisitionResolver",
    "ResolverOutcome",
    "CatalogIndex",
    "DISPLAY_LIMIT",
    "DraftTotals",
    "InvoiceAggregator",
    "InvoiceEditor",
    "SubmissionAssembler",
]
