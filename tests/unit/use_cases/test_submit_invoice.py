"""Tests for SubmitInvoiceUseCase."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from invoicedesk.application.use_cases import SubmitInvoiceUseCase
from invoicedesk.core.entities import Transaction
from invoicedesk.core.exceptions import (
    DraftLockedError,
    DraftValidationError,
    SubmissionError,
    SubmissionInProgressError,
)
from invoicedesk.core.services import InvoiceEditor


def _ready_editor(editor: InvoiceEditor) -> InvoiceEditor:
    """Acme buys 2 widgets and 1 gadget with a discount of 3."""
    editor.set_customer_name("Acme Ltd")
    editor.select_product(0, "p2")
    editor.update_item(0, {"quantity": 2})
    editor.add_from_search("p3")
    editor.set_discount("3")
    return editor


def _stored(submission) -> Transaction:
    return Transaction(
        **submission.transaction.model_dump(),
        id=1,
        items=[
            item.model_copy(update={"id": i + 1, "transaction_id": 1})
            for i, item in enumerate(submission.items)
        ],
    )


@pytest.fixture
def mock_store():
    store = AsyncMock()
    store.create_transaction.side_effect = _stored
    return store


class TestSubmitInvoiceUseCase:
    async def test_success_persists_and_resets(self, editor, mock_store):
        _ready_editor(editor)
        use_case = SubmitInvoiceUseCase(transaction_store=mock_store)

        result = await use_case.execute(editor)

        mock_store.create_transaction.assert_awaited_once()
        submission = mock_store.create_transaction.await_args.args[0]
        assert submission.transaction.total == "22"
        assert submission.transaction.customer_name == "Acme Ltd"
        assert [i.total for i in submission.items] == ["20", "5"]

        assert result.transaction.id == 1
        assert result.notification.title == "Success"
        assert editor.draft.customer_name == ""
        assert len(editor.draft.items) == 1
        assert editor.submitting is False

    async def test_validation_failure_never_calls_store(self, editor, mock_store):
        editor.set_customer_name("Acme Ltd")
        editor.update_item(0, {"product_name": "Loose item", "price": "4"})
        use_case = SubmitInvoiceUseCase(transaction_store=mock_store)

        with pytest.raises(DraftValidationError) as exc_info:
            await use_case.execute(editor)

        assert [e.field for e in exc_info.value.errors] == ["items.0.product_id"]
        mock_store.create_transaction.assert_not_awaited()
        assert editor.submitting is False

    async def test_store_failure_keeps_draft(self, editor, mock_store):
        _ready_editor(editor)
        before = editor.draft.model_copy(deep=True)
        mock_store.create_transaction.side_effect = RuntimeError("connection lost")
        use_case = SubmitInvoiceUseCase(transaction_store=mock_store)

        with pytest.raises(SubmissionError) as exc_info:
            await use_case.execute(editor)

        assert exc_info.value.notification.title == "Error"
        assert editor.draft == before
        assert editor.submitting is False

    async def test_retry_after_failure(self, editor, mock_store):
        _ready_editor(editor)
        mock_store.create_transaction.side_effect = RuntimeError("boom")
        use_case = SubmitInvoiceUseCase(transaction_store=mock_store)

        with pytest.raises(SubmissionError):
            await use_case.execute(editor)
        mock_store.create_transaction.side_effect = _stored
        result = await use_case.execute(editor)

        assert result.transaction.total == "22"
        assert mock_store.create_transaction.await_count == 2

    async def test_already_submitting(self, editor, mock_store):
        _ready_editor(editor)
        editor.begin_submission()
        use_case = SubmitInvoiceUseCase(transaction_store=mock_store)

        with pytest.raises(SubmissionInProgressError):
            await use_case.execute(editor)
        mock_store.create_transaction.assert_not_awaited()

    async def test_draft_locked_while_store_call_outstanding(self, editor):
        _ready_editor(editor)
        release = asyncio.Event()
        started = asyncio.Event()

        async def slow_create(submission):
            started.set()
            await release.wait()
            return _stored(submission)

        store = AsyncMock()
        store.create_transaction.side_effect = slow_create
        use_case = SubmitInvoiceUseCase(transaction_store=store)

        task = asyncio.create_task(use_case.execute(editor))
        await started.wait()

        assert editor.submitting is True
        with pytest.raises(SubmissionInProgressError):
            await use_case.execute(editor)
        with pytest.raises(DraftLockedError):
            editor.scan_barcode("123")

        release.set()
        result = await task
        assert result.transaction.id == 1
        assert store.create_transaction.await_count == 1

    def test_to_response(self, editor):
        _ready_editor(editor)
        from invoicedesk.core.services import SubmissionAssembler

        transaction = _stored(SubmissionAssembler().assemble(editor.draft))
        response = SubmitInvoiceUseCase().to_response(transaction)
        assert response.id == 1
        assert response.total == "22"
        assert [i.product_id for i in response.items] == ["p2", "p3"]
