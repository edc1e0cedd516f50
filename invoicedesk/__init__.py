"""InvoiceDesk: sales invoice line-item and totals engine."""

__version__ = "1.0.0"
