"""Configuration module."""

from invoicedesk.config.logging import (
    bind_draft_context,
    configure_logging,
    get_logger,
)
from invoicedesk.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "bind_draft_context",
]
