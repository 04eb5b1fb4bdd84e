"""
Tax rate lookup service.

Validates an address, forwards it to the upstream rate API, and normalizes
the answer into a percentage string with three decimal places.
"""

import logging
import math
from decimal import Decimal, InvalidOperation

from clients.tax_rate_client import CdtfaTaxRateClient, UpstreamResponse
from core.exceptions import (
    MissingAddressError,
    TaxRateNotFoundError,
    TaxRateUnavailableError,
)
from core.models import TaxRateLookupOutcome
from utils.numbers import fraction_to_percentage

logger = logging.getLogger(__name__)


class TaxRateService:
    """Service for address tax rate lookups."""

    def __init__(self, client: CdtfaTaxRateClient):
        self.client = client

    def lookup(self, address: str | None, city: str | None, zip_code: str | None) -> str:
        """
        Look up the sales tax rate for an address.

        Args:
            address: Street address
            city: City name
            zip_code: ZIP code

        Returns:
            Rate as a percentage string, e.g. "7.250"

        Raises:
            MissingAddressError: If any part is missing or blank
            TaxRateNotFoundError: If upstream has no usable rate
            TaxRateUnavailableError: If upstream cannot be reached or parsed
        """
        if not _present(address) or not _present(city) or not _present(zip_code):
            raise MissingAddressError()

        response = self.client.get_rate_by_address(address, city, zip_code)
        rate = _extract_rate(response)
        if rate is None:
            message = _extract_message(response)
            logger.info(
                f"No tax rate for {city} {zip_code} (upstream status {response.status_code})"
            )
            raise TaxRateNotFoundError(message)

        try:
            percentage = fraction_to_percentage(rate)
        except InvalidOperation:
            logger.warning(f"Upstream rate {rate} is out of range")
            raise TaxRateNotFoundError()

        logger.info(f"Tax rate for {city} {zip_code}: {percentage}%")
        return percentage

    def lookup_outcome(
        self, address: str | None, city: str | None, zip_code: str | None
    ) -> TaxRateLookupOutcome:
        """
        Look up a rate and fold every failure into an outcome.

        Used when the result is stored on an invoice rather than returned
        over HTTP. Unavailable errors are logged and replaced with a
        retry hint.
        """
        try:
            return TaxRateLookupOutcome(tax_rate=self.lookup(address, city, zip_code))
        except (MissingAddressError, TaxRateNotFoundError) as e:
            return TaxRateLookupOutcome(message=str(e))
        except TaxRateUnavailableError as e:
            logger.error(f"Tax rate lookup failed: {e}")
            return TaxRateLookupOutcome(
                message="Error fetching tax rate. Please try again later or enter manually."
            )


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def _extract_rate(response: UpstreamResponse) -> Decimal | None:
    """First record's rate when the response is a usable success, else None."""
    if not response.ok or not isinstance(response.payload, dict):
        return None

    records = response.payload.get("taxRateInfo")
    if not isinstance(records, list) or not records:
        return None

    first = records[0]
    if not isinstance(first, dict):
        return None

    rate = first.get("rate")
    # JSON booleans decode to bool, which is an int subclass
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return None
    if isinstance(rate, float) and not math.isfinite(rate):
        return None

    return Decimal(str(rate))


def _extract_message(response: UpstreamResponse) -> str | None:
    if not isinstance(response.payload, dict):
        return None
    message = response.payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None
