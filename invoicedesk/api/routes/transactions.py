"""Sales transaction endpoints (the persistence boundary)."""

from fastapi import APIRouter, Depends, status

from invoicedesk.api.dependencies import get_submit_invoice_use_case, get_tx_store
from invoicedesk.application.dto.requests import CreateTransactionRequest
from invoicedesk.application.dto.responses import (
    ErrorResponse,
    TransactionListResponse,
    TransactionResponse,
)
from invoicedesk.application.use_cases import SubmitInvoiceUseCase
from invoicedesk.core.entities.transaction import TransactionSubmission
from invoicedesk.core.exceptions import TransactionNotFoundError
from invoicedesk.infrastructure.storage.sqlite import SQLiteTransactionStore

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_transaction(
    request: CreateTransactionRequest,
    store: SQLiteTransactionStore = Depends(get_tx_store),
    use_case: SubmitInvoiceUseCase = Depends(get_submit_invoice_use_case),
) -> TransactionResponse:
    """Persist a transaction and its items in one atomic write."""
    transaction = await store.create_transaction(
        TransactionSubmission(transaction=request.transaction, items=request.items)
    )
    return use_case.to_response(transaction)


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    limit: int = 100,
    offset: int = 0,
    store: SQLiteTransactionStore = Depends(get_tx_store),
    use_case: SubmitInvoiceUseCase = Depends(get_submit_invoice_use_case),
) -> TransactionListResponse:
    """List transactions, newest first."""
    transactions = await store.list_transactions(limit=limit, offset=offset)
    return TransactionListResponse(
        transactions=[use_case.to_response(t) for t in transactions],
        total=len(transactions),
    )


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction(
    transaction_id: int,
    store: SQLiteTransactionStore = Depends(get_tx_store),
    use_case: SubmitInvoiceUseCase = Depends(get_submit_invoice_use_case),
) -> TransactionResponse:
    """Get a transaction by ID."""
    transaction = await store.get_transaction(transaction_id)
    if transaction is None:
        raise TransactionNotFoundError(transaction_id)
    return use_case.to_response(transaction)
