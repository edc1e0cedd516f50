"""API route modules."""

from invoicedesk.api.routes.catalog import router as catalog_router
from invoicedesk.api.routes.drafts import router as drafts_router
from invoicedesk.api.routes.health import router as health_router
from invoicedesk.api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "catalog_router",
    "drafts_router",
    "transactions_router",
]
