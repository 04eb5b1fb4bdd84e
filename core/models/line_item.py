"""Line item domain models.

Raw inputs (cost and percentages) are kept exactly as the user typed them,
since the user is mid-edit at all times. Derived amounts are Decimals rounded
to cents and are only ever produced by the calculator.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

RawNumber = str | int | float | Decimal | None

ZERO_MONEY = Decimal("0.00")


class LineItemUpdate(BaseModel):
    """Raw fields a user can edit on a line item. All fields optional."""

    description: str | None = Field(None, max_length=500)
    cost: RawNumber = None
    markup_percentage: RawNumber = None
    sales_tax_percentage: RawNumber = None

    # Derived amounts are never set directly
    model_config = {"extra": "forbid"}


class LineItem(BaseModel):
    """A line item revision with its derived amounts."""

    id: int = Field(..., ge=1)
    description: str = ""
    cost: RawNumber = 0
    markup_percentage: RawNumber = 0
    sales_tax_percentage: RawNumber = 0
    calculated_markup: Decimal = ZERO_MONEY
    calculated_sales_tax: Decimal = ZERO_MONEY
    line_total: Decimal = ZERO_MONEY

    model_config = {"frozen": True}

    @classmethod
    def blank(cls, item_id: int) -> "LineItem":
        """A fresh line with zero cost and percentages."""
        return cls(id=item_id)
