"""
Invoice service: the reducer over invoice revisions.

Every operation takes the current Invoice and returns the next revision,
already recomputed. Nothing is stored here; the caller owns the record.

Derived amounts on the incoming record are never reused: every new revision
is recomputed from raw inputs and the current markup mode.
"""

import logging

from core.calculator import recompute
from core.exceptions import LastLineItemError
from core.models import (
    Invoice,
    InvoiceDetailsUpdate,
    LineItem,
    LineItemUpdate,
    RawNumber,
    TaxRateLookupOutcome,
)
from core.services.tax_rate_service import TaxRateService

logger = logging.getLogger(__name__)

INCOMPLETE_ADDRESS_MESSAGE = (
    "Please enter a complete address (Street, City, Zip) to look up the tax rate."
)

# Changing either of these changes every line's effective markup
_MARKUP_FIELDS = {"apply_markup_to_all", "global_markup_percentage"}

_TEXT_FIELDS = {
    "invoice_number", "invoice_date", "vendor_name",
    "delivery_street", "delivery_city", "delivery_zip", "cdtfa_tax_rate",
}


class InvoiceService:
    """Service for invoice edits."""

    def create(self) -> Invoice:
        """
        Start a new invoice.

        Returns:
            Revision 0 with today's date and one blank line item
        """
        return recompute(Invoice(line_items=(LineItem.blank(1),)))

    def recompute(self, invoice: Invoice) -> Invoice:
        """Recompute all derived amounts without changing any input."""
        return _next_revision(invoice)

    def add_line_item(self, invoice: Invoice) -> Invoice:
        """
        Append a blank line item.

        The new id is one past the highest id in use.
        """
        line_items = invoice.line_items + (LineItem.blank(invoice.next_line_item_id),)
        return _next_revision(_with_lines(invoice, line_items))

    def remove_line_item(self, invoice: Invoice, item_id: int) -> Invoice:
        """
        Remove a line item.

        Raises:
            ValueError: If the line item is not found or is the only one left
        """
        if invoice.get_line_item(item_id) is None:
            raise ValueError(f"Line item {item_id} not found")

        if len(invoice.line_items) <= 1:
            raise LastLineItemError(item_id)

        line_items = tuple(item for item in invoice.line_items if item.id != item_id)
        return _next_revision(_with_lines(invoice, line_items))

    def update_line_item(self, invoice: Invoice, item_id: int, data: LineItemUpdate) -> Invoice:
        """
        Edit a line item's raw fields and recompute it.

        Fields explicitly set to None or blank are kept as entered; the
        calculator treats them as 0.

        Raises:
            ValueError: If the line item is not found
        """
        current = invoice.get_line_item(item_id)
        if current is None:
            raise ValueError(f"Line item {item_id} not found")

        updates = data.model_dump(exclude_unset=True)
        if "description" in updates and updates["description"] is None:
            updates["description"] = ""
        if not updates:
            return invoice

        edited = current.model_copy(update=updates)
        line_items = tuple(
            edited if item.id == item_id else item for item in invoice.line_items
        )
        return _next_revision(_with_lines(invoice, line_items))

    def update_details(self, invoice: Invoice, data: InvoiceDetailsUpdate) -> Invoice:
        """
        Edit header fields.

        Toggling global markup or changing its percentage recomputes every
        line; other header fields do not affect amounts.
        """
        updates = data.model_dump(exclude_unset=True)
        if updates.get("apply_markup_to_all") is None:
            updates.pop("apply_markup_to_all", None)
        for field in _TEXT_FIELDS:
            if field in updates and updates[field] is None:
                updates[field] = ""
        if not updates:
            return invoice

        details = invoice.details.model_copy(update=updates)
        updated = invoice.model_copy(update={"details": details})

        if _MARKUP_FIELDS & updates.keys():
            logger.debug(
                f"Markup mode changed (apply_to_all={details.apply_markup_to_all}) "
                f"for {len(invoice.line_items)} line items"
            )

        return _next_revision(updated)

    def set_apply_markup_to_all(self, invoice: Invoice, enabled: bool) -> Invoice:
        """Turn the global markup override on or off."""
        return self.update_details(invoice, InvoiceDetailsUpdate(apply_markup_to_all=enabled))

    def set_global_markup_percentage(self, invoice: Invoice, percentage: RawNumber) -> Invoice:
        """Change the global markup percentage."""
        return self.update_details(
            invoice, InvoiceDetailsUpdate(global_markup_percentage=percentage)
        )

    def apply_tax_lookup(self, invoice: Invoice, outcome: TaxRateLookupOutcome) -> Invoice:
        """
        Store a tax rate lookup result on the invoice.

        A found rate replaces cdtfa_tax_rate; a failure clears it. Either way
        lookup_message explains what happened.
        """
        if outcome.found:
            changes = {
                "cdtfa_tax_rate": outcome.tax_rate,
                "lookup_message": f"Tax rate found: {outcome.tax_rate}%",
            }
        else:
            changes = {"cdtfa_tax_rate": "", "lookup_message": outcome.message or ""}

        details = invoice.details.model_copy(update=changes)
        return _next_revision(invoice.model_copy(update={"details": details}))

    def lookup_tax_rate(self, invoice: Invoice, tax_rate_service: TaxRateService) -> Invoice:
        """
        Look up the tax rate for the invoice's delivery address.

        An incomplete address only sets a prompt and keeps the current rate.
        """
        details = invoice.details
        if not details.has_complete_address:
            updated = details.model_copy(update={"lookup_message": INCOMPLETE_ADDRESS_MESSAGE})
            return _next_revision(invoice.model_copy(update={"details": updated}))

        outcome = tax_rate_service.lookup_outcome(
            details.delivery_street, details.delivery_city, details.delivery_zip
        )
        return self.apply_tax_lookup(invoice, outcome)


def _with_lines(invoice: Invoice, line_items: tuple[LineItem, ...]) -> Invoice:
    return invoice.model_copy(update={"line_items": line_items})


def _next_revision(invoice: Invoice) -> Invoice:
    """Recompute every derived amount and bump the revision."""
    return recompute(invoice).model_copy(update={"revision": invoice.revision + 1})
