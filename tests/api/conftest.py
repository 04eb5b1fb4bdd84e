"""API test fixtures — TestClient over the real app factory."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app


@pytest.fixture
def services(invoice_service, tax_rate_service):
    return {
        "invoice": invoice_service,
        "tax_rate": tax_rate_service,
    }


@pytest.fixture
def app(services):
    """App with middleware, error handlers and all routes; upstream mocked via responses."""
    return create_app(services=services)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
