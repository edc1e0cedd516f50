"""SQLite implementation of the transaction persistence boundary."""

from datetime import datetime

import aiosqlite

from invoicedesk.config import get_logger
from invoicedesk.core.entities.transaction import (
    Transaction,
    TransactionItemRecord,
    TransactionSubmission,
)
from invoicedesk.core.interfaces.transaction_store import ITransactionStore
from invoicedesk.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLiteTransactionStore(ITransactionStore):
    """Stores a sale header and its items inside one SQL transaction."""

    async def create_transaction(self, submission: TransactionSubmission) -> Transaction:
        header = submission.transaction
        now = datetime.utcnow()

        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO transactions (
                    customer_id, customer_name, total, discount, tax,
                    payment_type, currency, status, transaction_type, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    header.customer_id,
                    header.customer_name,
                    header.total,
                    header.discount,
                    header.tax,
                    header.payment_type.value,
                    header.currency.value,
                    header.status,
                    header.transaction_type,
                    now.isoformat(),
                ),
            )
            transaction_id = cursor.lastrowid

            items: list[TransactionItemRecord] = []
            for item in submission.items:
                item_cursor = await conn.execute(
                    """
                    INSERT INTO transaction_items (
                        transaction_id, product_id, product_name, quantity, price, total
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        transaction_id,
                        item.product_id,
                        item.product_name,
                        item.quantity,
                        item.price,
                        item.total,
                    ),
                )
                items.append(
                    item.model_copy(
                        update={"id": item_cursor.lastrowid, "transaction_id": transaction_id}
                    )
                )

        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            items=len(items),
            total=header.total,
            currency=header.currency.value,
        )
        return Transaction(
            **header.model_dump(),
            id=transaction_id,
            items=items,
            created_at=now,
        )

    async def get_transaction(self, transaction_id: int) -> Transaction | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM transactions WHERE id = ?", (transaction_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, transaction_id)
        return self._row_to_transaction(row, items)

    async def list_transactions(
        self, limit: int = 100, offset: int = 0
    ) -> list[Transaction]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM transactions
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()

            transactions = []
            for row in rows:
                items = await self._load_items(conn, row["id"])
                transactions.append(self._row_to_transaction(row, items))
        return transactions

    async def _load_items(
        self, conn: aiosqlite.Connection, transaction_id: int
    ) -> list[TransactionItemRecord]:
        cursor = await conn.execute(
            "SELECT * FROM transaction_items WHERE transaction_id = ? ORDER BY id",
            (transaction_id,),
        )
        return [self._row_to_item(r) for r in await cursor.fetchall()]

    @staticmethod
    def _row_to_transaction(
        row: aiosqlite.Row, items: list[TransactionItemRecord]
    ) -> Transaction:
        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        return Transaction(
            id=row["id"],
            customer_id=row["customer_id"],
            customer_name=row["customer_name"],
            total=row["total"],
            discount=row["discount"],
            tax=row["tax"],
            payment_type=row["payment_type"],
            currency=row["currency"],
            status=row["status"],
            transaction_type=row["transaction_type"],
            items=items,
            created_at=created_at,
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> TransactionItemRecord:
        return TransactionItemRecord(
            id=row["id"],
            transaction_id=row["transaction_id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity=int(row["quantity"]),
            price=row["price"],
            total=row["total"],
        )
