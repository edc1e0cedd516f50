"""Abstract interface for the transaction persistence boundary."""

from abc import ABC, abstractmethod

from invoicedesk.core.entities.transaction import Transaction, TransactionSubmission


class ITransactionStore(ABC):
    """Interface for sales transaction persistence."""

    @abstractmethod
    async def create_transaction(self, submission: TransactionSubmission) -> Transaction:
        """Persist header and items atomically; nothing is written on failure."""
        pass

    @abstractmethod
    async def get_transaction(self, transaction_id: int) -> Transaction | None:
        """Get transaction by ID with items."""
        pass

    @abstractmethod
    async def list_transactions(
        self, limit: int = 100, offset: int = 0
    ) -> list[Transaction]:
        """List transactions, newest first."""
        pass
