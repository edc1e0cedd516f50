"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action

Draft validation failures add the per-field ``errors``; lookup misses and
submission failures add the ``notification`` the client should show.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from invoicedesk.application.dto.responses import ErrorResponse
from invoicedesk.config import get_logger
from invoicedesk.core.exceptions import (
    DraftLockedError,
    DraftValidationError,
    DuplicateCatalogEntryError,
    InvoiceDeskError,
    LookupMissError,
    StorageError,
    SubmissionError,
    SubmissionInProgressError,
    TooManyDraftsError,
    TransactionNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)


# First matching entry wins, so subclasses come before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    LookupMissError: status.HTTP_404_NOT_FOUND,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    DraftLockedError: status.HTTP_409_CONFLICT,
    TooManyDraftsError: status.HTTP_429_TOO_MANY_REQUESTS,
    SubmissionError: status.HTTP_502_BAD_GATEWAY,
    TransactionNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateCatalogEntryError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Fix the listed fields and submit again.",
    "PRODUCT_NOT_FOUND": "Check the barcode and scan again, or search by name.",
    "CUSTOMER_NOT_FOUND": "Try GET /api/customers to list available customers.",
    "DRAFT_NOT_FOUND": "The draft was submitted or cancelled. Open a new one with POST /api/invoice-drafts.",
    "ITEM_NOT_FOUND": "Reload the draft to see the current item rows.",
    "SUBMISSION_IN_PROGRESS": "Wait for the current submission to finish.",
    "DRAFT_LOCKED": "Wait for the current submission to finish before editing or cancelling the draft.",
    "TOO_MANY_DRAFTS": "Submit or cancel open drafts before opening new ones.",
    "SUBMISSION_FAILED": "The draft was kept. Retry the submission.",
    "TRANSACTION_NOT_FOUND": "Check the transaction ID and try GET /api/transactions.",
    "DUPLICATE_CATALOG_ENTRY": "Use a different ID or SKU.",
    "POOL_EXHAUSTED": "The database is busy. Retry shortly.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The resource is busy or already exists.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "The persistence backend failed. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standardized JSON response."""
    status_code = _status_for(exc)
    error_code = exc.code if isinstance(exc, InvoiceDeskError) else exc.__class__.__name__

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_type=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=str(exc),
        hint=_get_hint(error_code, status_code),
        errors=exc.errors if isinstance(exc, DraftValidationError) else None,
        notification=exc.notification if isinstance(exc, InvoiceDeskError) else None,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch-all for exceptions that escape the registered handlers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(InvoiceDeskError)
    async def domain_exception_handler(
        request: Request,
        exc: InvoiceDeskError,
    ) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="REQUEST_VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code, exc.detail or "")
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )


def _infer_error_code(status_code: int, detail: str) -> str:
    """Infer a machine-readable error code from HTTPException detail."""
    detail_lower = detail.lower()

    if status_code == 404:
        if "transaction" in detail_lower:
            return "TRANSACTION_NOT_FOUND"
        if "draft" in detail_lower:
            return "DRAFT_NOT_FOUND"
        return "NOT_FOUND"

    if status_code == 400:
        return "BAD_REQUEST"

    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"

    return "HTTP_ERROR"
