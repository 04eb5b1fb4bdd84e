"""GET /api/tax-rate — CORS-free proxy to the upstream tax rate API.

Bodies are bare objects, not the API envelope:
    200 {"taxRate": "7.250"}
    400 / 404 / 405 / 500 {"message": "..."}
"""

import logging

from fastapi import APIRouter, Query, Request
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from core.exceptions import (
    MissingAddressError,
    TaxRateNotFoundError,
    TaxRateUnavailableError,
)
from core.services.tax_rate_service import TaxRateService

logger = logging.getLogger(__name__)

# Registered for every method so non-GET gets the proxy's own 405 body
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_tax_rate_router(tax_rate_service: TaxRateService) -> APIRouter:
    router = APIRouter()

    @router.api_route("/tax-rate", methods=_ALL_METHODS)
    async def get_tax_rate(
        request: Request,
        address: str | None = Query(None),
        city: str | None = Query(None),
        zip: str | None = Query(None),
    ):
        if request.method != "GET":
            return _message(405, "Method Not Allowed")

        try:
            tax_rate = await run_in_threadpool(tax_rate_service.lookup, address, city, zip)
        except MissingAddressError as e:
            return _message(400, str(e))
        except TaxRateNotFoundError as e:
            return _message(404, e.message)
        except TaxRateUnavailableError as e:
            logger.error(f"Error fetching tax rate from upstream API: {e}")
            return _message(500, TaxRateUnavailableError.PUBLIC_MESSAGE)
        except Exception:
            logger.exception("Unexpected error during tax rate lookup")
            return _message(500, TaxRateUnavailableError.PUBLIC_MESSAGE)

        return JSONResponse(status_code=200, content={"taxRate": tax_rate})

    return router
