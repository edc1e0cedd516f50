"""
Service factory functions for dependency injection.

Wires the shared catalog index to its catalog source and keeps the
registry of open editing sessions. Use cases and routes import from here.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from invoicedesk.config import get_logger, get_settings
from invoicedesk.core.entities.invoice_draft import Currency, PaymentType
from invoicedesk.core.exceptions import DraftNotFoundError, TooManyDraftsError
from invoicedesk.core.services import CatalogIndex, InvoiceEditor

if TYPE_CHECKING:
    from invoicedesk.core.interfaces import ICatalogSource

logger = get_logger(__name__)


@dataclass
class DraftSession:
    """An open editing session and when it was opened."""

    id: str
    editor: InvoiceEditor
    created_at: datetime = field(default_factory=datetime.utcnow)


class DraftRegistry:
    """
    In-memory registry of open editing sessions.

    Drafts are never persisted; closing a session (submit or cancel)
    discards its draft for good.
    """

    def __init__(self, max_open: int = 100) -> None:
        self.max_open = max_open
        self._sessions: dict[str, DraftSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self,
        catalog: CatalogIndex,
        currency: Currency | str | None = None,
        payment_type: PaymentType | str | None = None,
    ) -> DraftSession:
        if len(self._sessions) >= self.max_open:
            raise TooManyDraftsError(self.max_open)

        settings = get_settings().invoice
        editor = InvoiceEditor(
            catalog,
            default_currency=currency or settings.default_currency,
            default_payment_type=payment_type or settings.default_payment_type,
        )
        session = DraftSession(id=uuid.uuid4().hex, editor=editor)
        self._sessions[session.id] = session
        logger.info("invoice_draft_opened", draft_id=session.id, open_drafts=len(self))
        return session

    def get(self, draft_id: str) -> DraftSession:
        session = self._sessions.get(draft_id)
        if session is None:
            raise DraftNotFoundError(draft_id)
        return session

    def close(self, draft_id: str) -> None:
        if self._sessions.pop(draft_id, None) is None:
            raise DraftNotFoundError(draft_id)
        logger.info("invoice_draft_closed", draft_id=draft_id, open_drafts=len(self))

    def cancel(self, draft_id: str) -> None:
        """
        Discard a draft the operator gave up on.

        Raises:
            DraftLockedError: its submission is still outstanding and must
                run to completion first.
        """
        self.get(draft_id).editor.guard("cancel the invoice")
        self.close(draft_id)


# Singleton instances
_catalog_index: CatalogIndex | None = None
_draft_registry: DraftRegistry | None = None


async def _default_catalog_source() -> "ICatalogSource":
    from invoicedesk.infrastructure.storage.sqlite import get_catalog_store

    return await get_catalog_store()


async def get_catalog_index(
    catalog_source: "ICatalogSource | None" = None,
) -> CatalogIndex:
    """
    Get or create the shared CatalogIndex.

    The first call loads a snapshot from the catalog source; later calls
    return the same index. Every open editor holds this instance, so a
    refresh is seen by all of them at once.
    """
    global _catalog_index
    if _catalog_index is None:
        source = catalog_source or await _default_catalog_source()
        index = CatalogIndex(display_limit=get_settings().invoice.search_display_limit)
        index.refresh(await source.load_snapshot())
        _catalog_index = index
    return _catalog_index


async def refresh_catalog_index(
    catalog_source: "ICatalogSource | None" = None,
) -> CatalogIndex:
    """Reload the snapshot from the catalog source and swap it in."""
    source = catalog_source or await _default_catalog_source()
    if _catalog_index is None:
        return await get_catalog_index(source)
    _catalog_index.refresh(await source.load_snapshot())
    return _catalog_index


def get_draft_registry() -> DraftRegistry:
    """Get or create the registry of open editing sessions."""
    global _draft_registry
    if _draft_registry is None:
        _draft_registry = DraftRegistry(max_open=get_settings().invoice.max_open_drafts)
    return _draft_registry


def reset_services() -> None:
    """Drop singletons (for testing)."""
    global _catalog_index, _draft_registry
    _catalog_index = None
    _draft_registry = None
