"""Application use cases."""

from invoicedesk.application.use_cases.create_customer import CreateCustomerUseCase
from invoicedesk.application.use_cases.create_product import CreateProductUseCase
from invoicedesk.application.use_cases.submit_invoice import (
    SubmitInvoiceResult,
    SubmitInvoiceUseCase,
)

__all__ = [
    "CreateCustomerUseCase",
    "CreateProductUseCase",
    "SubmitInvoiceUseCase",
    "SubmitInvoiceResult",
]
