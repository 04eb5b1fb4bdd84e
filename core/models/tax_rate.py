"""Tax rate lookup models."""

from pydantic import BaseModel


class TaxRateLookupOutcome(BaseModel):
    """
    Result of a tax rate lookup as seen by the invoice.

    Exactly one of tax_rate (a percentage string such as "7.250") or
    message (why no rate is available) is set.
    """

    tax_rate: str | None = None
    message: str | None = None

    model_config = {"frozen": True}

    @property
    def found(self) -> bool:
        return self.tax_rate is not None
