"""POST /api/actions — stateless invoice reducer endpoint.

The client sends its current invoice revision plus one action and gets the
next revision back. The server keeps nothing between requests. Derived
amounts in the posted invoice are recomputed before any action runs.
"""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from api.base import success_response
from core.calculator import recompute
from core.models import Invoice, InvoiceDetailsUpdate, LineItemUpdate
from core.services.invoice_service import InvoiceService
from core.services.tax_rate_service import TaxRateService


class ActionRequest(BaseModel):
    action: str
    invoice: Invoice | None = None
    data: dict[str, Any] = Field(default_factory=dict)


def create_actions_router(
    invoice_service: InvoiceService, tax_rate_service: TaxRateService
) -> APIRouter:
    router = APIRouter()
    handler = InvoiceHandler(invoice_service, tax_rate_service)

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Unknown action '{body.action}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        if body.invoice is None and body.action not in handler.NO_INVOICE_ACTIONS:
            raise ValueError(f"Action '{body.action}' requires an 'invoice'")

        posted = recompute(body.invoice) if body.invoice is not None else None

        method = getattr(handler, f"_handle_{body.action}")
        if body.action in handler.BLOCKING_ACTIONS:
            invoice = await run_in_threadpool(method, posted, dict(body.data))
        else:
            invoice = method(posted, dict(body.data))

        request_id = getattr(request.state, "request_id", None)
        return success_response(invoice.model_dump(mode="json"), request_id).model_dump(mode="json")

    return router


# =============================================================================
# HANDLER CLASSES
# =============================================================================


class InvoiceHandler:
    ALLOWED_ACTIONS = {
        "create", "recompute", "add_line_item", "remove_line_item",
        "update_line_item", "update_details", "lookup_tax_rate",
    }
    NO_INVOICE_ACTIONS = {"create"}
    # Calls the upstream API
    BLOCKING_ACTIONS = {"lookup_tax_rate"}

    def __init__(self, service: InvoiceService, tax_rate_service: TaxRateService):
        self.service = service
        self.tax_rate_service = tax_rate_service

    def _handle_create(self, invoice: Invoice | None, data: dict) -> Invoice:
        return self.service.create()

    def _handle_recompute(self, invoice: Invoice, data: dict) -> Invoice:
        return self.service.recompute(invoice)

    def _handle_add_line_item(self, invoice: Invoice, data: dict) -> Invoice:
        return self.service.add_line_item(invoice)

    def _handle_remove_line_item(self, invoice: Invoice, data: dict) -> Invoice:
        return self.service.remove_line_item(invoice, _line_item_id(data))

    def _handle_update_line_item(self, invoice: Invoice, data: dict) -> Invoice:
        item_id = _line_item_id(data)
        data.pop("id")
        return self.service.update_line_item(invoice, item_id, LineItemUpdate(**data))

    def _handle_update_details(self, invoice: Invoice, data: dict) -> Invoice:
        return self.service.update_details(invoice, InvoiceDetailsUpdate(**data))

    def _handle_lookup_tax_rate(self, invoice: Invoice, data: dict) -> Invoice:
        return self.service.lookup_tax_rate(invoice, self.tax_rate_service)


def _line_item_id(data: dict) -> int:
    if "id" not in data:
        raise ValueError("Line item 'id' is required")
    try:
        return int(data["id"])
    except (TypeError, ValueError):
        raise ValueError(f"Invalid line item id '{data['id']}'")
