"""Core domain models."""

from core.models.invoice import Invoice, InvoiceForm, InvoiceStatus

__all__ = [
    # Invoice
    "Invoice", "InvoiceForm", "InvoiceStatus",
]
