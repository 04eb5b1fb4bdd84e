"""Tests for TaxRateService - validation and upstream normalization."""

from unittest.mock import Mock

import pytest
import requests
import responses

from clients.tax_rate_client import CdtfaTaxRateClient, UpstreamResponse
from core.exceptions import (
    MissingAddressError,
    TaxRateNotFoundError,
    TaxRateUnavailableError,
)
from core.services.tax_rate_service import TaxRateService


def _service_returning(status_code: int, payload) -> TaxRateService:
    client = Mock(spec=CdtfaTaxRateClient)
    client.get_rate_by_address.return_value = UpstreamResponse(status_code, payload)
    return TaxRateService(client)


class TestLookupValidation:
    """Missing input is rejected before any upstream call."""

    @pytest.mark.parametrize(
        "address,city,zip_code",
        [
            (None, "Anytown", "90210"),
            ("1 Main St", None, "90210"),
            ("1 Main St", "Anytown", None),
            ("", "Anytown", "90210"),
            ("1 Main St", "   ", "90210"),
        ],
    )
    def test_missing_part_raises(self, address, city, zip_code):
        client = Mock(spec=CdtfaTaxRateClient)
        service = TaxRateService(client)

        with pytest.raises(MissingAddressError, match="Missing address, city, or zip query parameters."):
            service.lookup(address, city, zip_code)

        client.get_rate_by_address.assert_not_called()


class TestLookupNormalization:
    """Upstream answers are normalized to a 3-place percentage."""

    def test_fraction_becomes_percentage(self):
        service = _service_returning(200, {"taxRateInfo": [{"rate": 0.0725}]})
        assert service.lookup("1 Main St", "Anytown", "90210") == "7.250"

    def test_uses_first_record(self):
        service = _service_returning(
            200, {"taxRateInfo": [{"rate": 0.0875, "jurisdiction": "A"}, {"rate": 0.1}]}
        )
        assert service.lookup("1 Main St", "Anytown", "90210") == "8.750"

    def test_integer_rate_accepted(self):
        service = _service_returning(200, {"taxRateInfo": [{"rate": 0}]})
        assert service.lookup("1 Main St", "Anytown", "90210") == "0.000"

    def test_rounds_half_up_to_three_places(self):
        service = _service_returning(200, {"taxRateInfo": [{"rate": 0.0912345}]})
        assert service.lookup("1 Main St", "Anytown", "90210") == "9.123"


class TestLookupNotFound:
    """Well-formed answers without a usable rate."""

    @pytest.mark.parametrize(
        "payload",
        [
            {"taxRateInfo": []},
            {},
            {"taxRateInfo": None},
            {"taxRateInfo": [{"rate": "0.0725"}]},
            {"taxRateInfo": [{"rate": True}]},
            {"taxRateInfo": [{}]},
            {"taxRateInfo": ["0.0725"]},
            [],
        ],
    )
    def test_default_message(self, payload):
        service = _service_returning(200, payload)

        with pytest.raises(TaxRateNotFoundError) as exc_info:
            service.lookup("1 Main St", "Anytown", "90210")

        assert exc_info.value.message == "Could not find tax rate for the provided address."

    def test_upstream_message_is_passed_through(self):
        service = _service_returning(200, {"taxRateInfo": [], "message": "Address not found."})

        with pytest.raises(TaxRateNotFoundError) as exc_info:
            service.lookup("1 Main St", "Anytown", "90210")

        assert exc_info.value.message == "Address not found."

    def test_non_2xx_with_rate_is_not_found(self):
        """A rate in an error response is not trusted."""
        service = _service_returning(
            400, {"taxRateInfo": [{"rate": 0.0725}], "message": "Bad request"}
        )

        with pytest.raises(TaxRateNotFoundError, match="Bad request"):
            service.lookup("1 Main St", "Anytown", "90210")

    def test_out_of_range_rate_is_not_found(self):
        service = _service_returning(200, {"taxRateInfo": [{"rate": 1e300}]})

        with pytest.raises(TaxRateNotFoundError):
            service.lookup("1 Main St", "Anytown", "90210")


class TestLookupUnavailable:
    """Transport failures propagate as TaxRateUnavailableError."""

    @responses.activate
    def test_network_error(self, tax_rate_service, tax_api_url):
        responses.add(
            responses.GET,
            tax_api_url,
            body=requests.exceptions.ConnectionError("connection refused"),
        )

        with pytest.raises(TaxRateUnavailableError):
            tax_rate_service.lookup("1 Main St", "Anytown", "90210")


class TestLookupOutcome:
    """Tests for lookup_outcome(), which never raises for lookup failures."""

    def test_found(self):
        service = _service_returning(200, {"taxRateInfo": [{"rate": 0.0725}]})

        outcome = service.lookup_outcome("1 Main St", "Anytown", "90210")

        assert outcome.found
        assert outcome.tax_rate == "7.250"

    def test_not_found_keeps_upstream_message(self):
        service = _service_returning(200, {"taxRateInfo": [], "message": "No match"})

        outcome = service.lookup_outcome("1 Main St", "Anytown", "90210")

        assert not outcome.found
        assert outcome.message == "No match"

    @responses.activate
    def test_unavailable_hides_detail(self, tax_rate_service, tax_api_url):
        responses.add(
            responses.GET,
            tax_api_url,
            body=requests.exceptions.ConnectionError("secret-host.internal refused"),
        )

        outcome = tax_rate_service.lookup_outcome("1 Main St", "Anytown", "90210")

        assert not outcome.found
        assert outcome.message == "Error fetching tax rate. Please try again later or enter manually."
        assert "secret-host" not in outcome.message
