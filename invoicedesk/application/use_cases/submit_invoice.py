"""Submit Invoice Use Case: validate a draft and persist it as a sale."""

from dataclasses import dataclass

from invoicedesk.application.dto.responses import (
    TransactionItemResponse,
    TransactionResponse,
)
from invoicedesk.config import get_logger
from invoicedesk.core.entities.notification import Notification, invoice_created
from invoicedesk.core.entities.transaction import Transaction
from invoicedesk.core.exceptions import SubmissionError, SubmissionInProgressError
from invoicedesk.core.interfaces.transaction_store import ITransactionStore
from invoicedesk.core.services.invoice_editor import InvoiceEditor
from invoicedesk.core.services.submission_assembler import SubmissionAssembler

logger = get_logger(__name__)


@dataclass
class SubmitInvoiceResult:
    """Result of a successful submission."""

    transaction: Transaction
    notification: Notification


class SubmitInvoiceUseCase:
    """
    Hand the editor's draft to the persistence boundary.

    Validation failures raise before anything is sent. While the store call
    is outstanding the editor is locked, so a second submit or any edit is
    rejected. On success the editor's draft is discarded; on failure it is
    left exactly as it was.
    """

    def __init__(
        self,
        transaction_store: ITransactionStore | None = None,
        assembler: SubmissionAssembler | None = None,
    ):
        self._transaction_store = transaction_store
        self._assembler = assembler or SubmissionAssembler()

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from invoicedesk.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def execute(self, editor: InvoiceEditor) -> SubmitInvoiceResult:
        """Execute submit invoice use case."""
        if editor.submitting:
            raise SubmissionInProgressError()

        submission = self._assembler.assemble(editor.draft)
        store = await self._get_transaction_store()

        logger.info(
            "invoice_submission_started",
            items=len(submission.items),
            total=submission.transaction.total,
            currency=submission.transaction.currency.value,
        )

        editor.begin_submission()
        success = False
        try:
            transaction = await store.create_transaction(submission)
            success = True
        except Exception as e:
            logger.error("invoice_submission_failed", error=str(e))
            raise SubmissionError(str(e) or e.__class__.__name__) from e
        finally:
            editor.finish_submission(success)

        logger.info(
            "invoice_submitted",
            transaction_id=transaction.id,
            total=transaction.total,
        )
        return SubmitInvoiceResult(transaction=transaction, notification=invoice_created())

    def to_response(self, transaction: Transaction) -> TransactionResponse:
        """Convert a persisted transaction to API response."""
        return TransactionResponse(
            id=transaction.id,  # type: ignore[arg-type]
            customer_id=transaction.customer_id,
            customer_name=transaction.customer_name,
            total=transaction.total,
            discount=transaction.discount,
            tax=transaction.tax,
            payment_type=transaction.payment_type,
            currency=transaction.currency,
            status=transaction.status,
            transaction_type=transaction.transaction_type,
            items=[
                TransactionItemResponse(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    price=item.price,
                    total=item.total,
                )
                for item in transaction.items
            ],
            created_at=transaction.created_at,
        )
