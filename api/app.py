"""FastAPI application factory."""

from fastapi import FastAPI

from api.actions import create_actions_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.tax_rate import create_tax_rate_router
from clients.tax_rate_client import CdtfaTaxRateClient
from core.config import AppConfig
from core.services.invoice_service import InvoiceService
from core.services.tax_rate_service import TaxRateService


def create_services(config: AppConfig) -> dict:
    """Build the service graph from config."""
    client = CdtfaTaxRateClient(
        api_url=config.tax_rate_api_url,
        timeout_seconds=config.tax_rate_timeout_seconds,
    )
    return {
        "invoice": InvoiceService(),
        "tax_rate": TaxRateService(client),
    }


def create_app(config: AppConfig | None = None, services: dict | None = None) -> FastAPI:
    """
    Assemble the app: middleware, error handlers, routes.

    Args:
        config: Defaults to AppConfig() when neither config nor services given
        services: Prebuilt services (tests inject mocks here)
    """
    if services is None:
        services = create_services(config or AppConfig())

    app = FastAPI(
        title="Cross-Billing Calculator API",
        version="0.1.0",
        description="Invoice markup/tax calculation and address tax rate lookup.",
    )
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_tax_rate_router(services["tax_rate"]), prefix="/api")
    app.include_router(
        create_actions_router(services["invoice"], services["tax_rate"]), prefix="/api"
    )

    return app
