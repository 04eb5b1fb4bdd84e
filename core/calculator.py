"""
Invoice calculation engine.

Pure functions over the invoice model. Per line, markup is applied to cost
first and sales tax is charged on cost plus markup:

    markup      = cost * markup% / 100
    after       = cost + markup
    tax         = after * tax% / 100
    line_total  = after + tax

markup, tax and line_total are each rounded to cents independently with
ROUND_HALF_UP. line_total is rounded from the unrounded sum, not rebuilt from
the rounded parts. Totals sum the per-line amounts and round once at the end.
"""

from collections.abc import Iterable
from decimal import Decimal

from core.models import Invoice, InvoiceDetails, LineItem, RawNumber, Totals
from utils.numbers import HUNDRED, ZERO, parse_decimal, round_money


def compute_line(item: LineItem, effective_markup_percentage: RawNumber = None) -> LineItem:
    """
    Recompute a line item's derived amounts.

    Args:
        item: Line item with raw cost and percentages
        effective_markup_percentage: Overrides the item's own markup
            percentage for this computation only. None means use the item's.

    Returns:
        Copy of the item with calculated_markup, calculated_sales_tax and
        line_total replaced. Raw fields are untouched.
    """
    cost = parse_decimal(item.cost)
    if effective_markup_percentage is None:
        markup_pct = parse_decimal(item.markup_percentage)
    else:
        markup_pct = parse_decimal(effective_markup_percentage)
    tax_pct = parse_decimal(item.sales_tax_percentage)

    markup = cost * (markup_pct / HUNDRED)
    after_markup = cost + markup
    tax = after_markup * (tax_pct / HUNDRED)
    line_total = after_markup + tax

    return item.model_copy(
        update={
            "calculated_markup": round_money(markup),
            "calculated_sales_tax": round_money(tax),
            "line_total": round_money(line_total),
        }
    )


def compute_totals(line_items: Iterable[LineItem]) -> Totals:
    """
    Sum line items into invoice totals.

    Subtotal sums the parsed raw cost; the other totals sum the derived
    amounts already on each item. Rounding happens once, after the fold.
    """
    subtotal = ZERO
    total_markup = ZERO
    total_sales_tax = ZERO
    grand_total = ZERO

    for item in line_items:
        subtotal += parse_decimal(item.cost)
        total_markup += item.calculated_markup
        total_sales_tax += item.calculated_sales_tax
        grand_total += item.line_total

    return Totals(
        subtotal=round_money(subtotal),
        total_markup=round_money(total_markup),
        total_sales_tax=round_money(total_sales_tax),
        grand_total=round_money(grand_total),
    )


def effective_markup(details: InvoiceDetails) -> Decimal | None:
    """The parsed global markup percentage while it applies to all lines, else None."""
    if details.apply_markup_to_all:
        return parse_decimal(details.global_markup_percentage)
    return None


def recompute(invoice: Invoice) -> Invoice:
    """Recompute every line with the effective markup, then the totals."""
    override = effective_markup(invoice.details)
    line_items = tuple(compute_line(item, override) for item in invoice.line_items)
    return invoice.model_copy(
        update={"line_items": line_items, "totals": compute_totals(line_items)}
    )
