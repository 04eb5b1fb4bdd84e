"""Typed exceptions for invoice edits and tax rate lookups."""


class TaxRateError(Exception):
    """Base class for tax rate lookup errors."""


class MissingAddressError(TaxRateError):
    """Address, city or zip was not supplied. Not retried."""

    def __init__(self):
        super().__init__("Missing address, city, or zip query parameters.")


class TaxRateNotFoundError(TaxRateError):
    """
    Upstream answered but had no usable rate for the address.

    The message is the upstream's own when it sent one, so it is safe to
    show to the caller.
    """

    DEFAULT_MESSAGE = "Could not find tax rate for the provided address."

    def __init__(self, message: str | None = None):
        self.message = message or self.DEFAULT_MESSAGE
        super().__init__(self.message)


class TaxRateUnavailableError(TaxRateError):
    """
    Upstream could not be reached or returned something unparseable.

    The exception text carries the underlying detail for logs only.
    Callers get PUBLIC_MESSAGE.
    """

    PUBLIC_MESSAGE = "Internal Server Error: Failed to fetch tax rate."


class LastLineItemError(ValueError):
    """Removing the line item would leave the invoice empty."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Line item {item_id} is the last one; an invoice must keep at least one line item")
