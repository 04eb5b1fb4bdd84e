"""Shared test fixtures for the cross-billing calculator test suite."""

from decimal import Decimal

import pytest

from clients.tax_rate_client import CdtfaTaxRateClient
from core.models import Invoice, InvoiceDetails, LineItem
from core.services.invoice_service import InvoiceService
from core.services.tax_rate_service import TaxRateService


# =============================================================================
# UPSTREAM CONSTANTS
# =============================================================================

TAX_API_URL = "https://tax.example.test/api/taxrate/GetRateByAddress"


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def tax_api_url() -> str:
    return TAX_API_URL


@pytest.fixture
def tax_rate_client(tax_api_url) -> CdtfaTaxRateClient:
    """Client pointed at the mocked upstream."""
    return CdtfaTaxRateClient(api_url=tax_api_url, timeout_seconds=5)


@pytest.fixture
def tax_rate_service(tax_rate_client) -> TaxRateService:
    return TaxRateService(tax_rate_client)


@pytest.fixture
def invoice_service() -> InvoiceService:
    return InvoiceService()


# =============================================================================
# INVOICE FIXTURES
# =============================================================================


@pytest.fixture
def two_line_invoice(invoice_service) -> Invoice:
    """
    Recomputed invoice with two priced lines.

    Line 1: 100.00 cost, 10% markup, 8.25% tax -> 119.08
    Line 2:  50.00 cost,  0% markup, 10% tax   ->  55.00
    """
    invoice = Invoice(
        details=InvoiceDetails(
            invoice_number="INV-2025-001",
            vendor_name="Acme Corporation",
            delivery_street="450 N St",
            delivery_city="Sacramento",
            delivery_zip="95814",
        ),
        line_items=(
            LineItem(id=1, description="Service fee", cost="100", markup_percentage="10",
                     sales_tax_percentage="8.25"),
            LineItem(id=2, description="Parts", cost=Decimal("50.00"), markup_percentage=0,
                     sales_tax_percentage=10),
        ),
    )
    return invoice_service.recompute(invoice)
