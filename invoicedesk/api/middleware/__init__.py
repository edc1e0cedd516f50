"""API middleware."""

from invoicedesk.api.middleware.error_handler import ErrorHandlerMiddleware
from invoicedesk.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
