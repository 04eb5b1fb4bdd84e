"""Core domain models."""

from core.models.line_item import LineItem, LineItemUpdate, RawNumber
from core.models.invoice import Invoice, InvoiceDetails, InvoiceDetailsUpdate, Totals
from core.models.tax_rate import TaxRateLookupOutcome

__all__ = [
    # LineItem
    "LineItem", "LineItemUpdate", "RawNumber",
    # Invoice
    "Invoice", "InvoiceDetails", "InvoiceDetailsUpdate", "Totals",
    # Tax rate
    "TaxRateLookupOutcome",
]
