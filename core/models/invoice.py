"""Invoice domain models.

An Invoice is one immutable revision. Every edit produces a new record with
the revision counter bumped; nothing is persisted.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from core.models.line_item import LineItem, RawNumber, ZERO_MONEY
from utils.timezone import today_iso


class InvoiceDetails(BaseModel):
    """Header fields of an invoice."""

    invoice_number: str = ""
    invoice_date: str = Field(default_factory=today_iso)
    vendor_name: str = ""
    delivery_street: str = ""
    delivery_city: str = ""
    delivery_zip: str = ""
    cdtfa_tax_rate: str = ""  # Percentage, e.g. "7.250"
    lookup_message: str = ""
    apply_markup_to_all: bool = False
    global_markup_percentage: RawNumber = 0

    model_config = {"frozen": True}

    @property
    def has_complete_address(self) -> bool:
        """Whether street, city and zip are all filled in."""
        return all(
            part.strip()
            for part in (self.delivery_street, self.delivery_city, self.delivery_zip)
        )


class InvoiceDetailsUpdate(BaseModel):
    """Header fields a user can edit. All fields optional."""

    invoice_number: str | None = None
    invoice_date: str | None = None
    vendor_name: str | None = None
    delivery_street: str | None = None
    delivery_city: str | None = None
    delivery_zip: str | None = None
    cdtfa_tax_rate: str | None = None
    apply_markup_to_all: bool | None = None
    global_markup_percentage: RawNumber = None

    model_config = {"extra": "forbid"}


class Totals(BaseModel):
    """Invoice-wide sums, recomputed wholesale on every change."""

    subtotal: Decimal = ZERO_MONEY
    total_markup: Decimal = ZERO_MONEY
    total_sales_tax: Decimal = ZERO_MONEY
    grand_total: Decimal = ZERO_MONEY

    model_config = {"frozen": True}


class Invoice(BaseModel):
    """One revision of an invoice session."""

    details: InvoiceDetails = Field(default_factory=InvoiceDetails)
    line_items: tuple[LineItem, ...] = ()
    totals: Totals = Field(default_factory=Totals)
    revision: int = Field(0, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_unique_line_ids(self) -> "Invoice":
        """Line item ids must be unique within an invoice."""
        ids = [item.id for item in self.line_items]
        if len(ids) != len(set(ids)):
            raise ValueError("Line item ids must be unique")
        return self

    def get_line_item(self, item_id: int) -> LineItem | None:
        """Line item by id, or None."""
        for item in self.line_items:
            if item.id == item_id:
                return item
        return None

    @property
    def next_line_item_id(self) -> int:
        """One past the highest id in use, or 1 for an empty invoice."""
        if not self.line_items:
            return 1
        return max(item.id for item in self.line_items) + 1
