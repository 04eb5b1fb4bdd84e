"""
CDTFA tax-rate-by-address client.

One GET per lookup. No retry, no caching. Transport and JSON failures are
raised as TaxRateUnavailableError; any parsed answer, including non-2xx
statuses, is handed back for the caller to interpret.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

import requests

from core.config import CDTFA_RATE_BY_ADDRESS_URL
from core.exceptions import TaxRateUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    """Parsed upstream answer."""

    status_code: int
    payload: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class CdtfaTaxRateClient:
    """Query the CDTFA GetRateByAddress endpoint."""

    def __init__(self, api_url: str = CDTFA_RATE_BY_ADDRESS_URL, timeout_seconds: int = 10):
        """
        Initialize with the upstream endpoint.

        Args:
            api_url: Full URL of the rate-by-address endpoint
            timeout_seconds: Per-request timeout

        Raises:
            ValueError: If api_url is empty
        """
        if not api_url:
            raise ValueError("api_url is required")

        self.api_url = api_url
        self.timeout_seconds = timeout_seconds

    def get_rate_by_address(self, address: str, city: str, zip_code: str) -> UpstreamResponse:
        """
        Fetch rate records for a street address.

        Args:
            address: Street address
            city: City name
            zip_code: ZIP code

        Returns:
            UpstreamResponse with the status code and decoded JSON body

        Raises:
            TaxRateUnavailableError: On network failure or a non-JSON body
        """
        # Spaces go out as %20, not the form-style "+" requests would use
        query = urlencode(
            {"address": address, "city": city, "zip": zip_code}, quote_via=quote
        )

        try:
            response = requests.get(
                f"{self.api_url}?{query}",
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except (requests.exceptions.RequestException, ConnectionError) as e:
            logger.error(f"Tax rate API connection failed: {e}")
            raise TaxRateUnavailableError(f"Connection failed: {e}")

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            logger.error(
                f"Tax rate API returned invalid JSON (status {response.status_code}): "
                f"{response.text[:200]}"
            )
            raise TaxRateUnavailableError("Invalid response from tax rate API")

        logger.debug(f"Tax rate API responded with status {response.status_code}")
        return UpstreamResponse(status_code=response.status_code, payload=payload)
