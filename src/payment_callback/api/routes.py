"""Callback endpoints called by the payment processor and the buyer's browser."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from payment_callback.handlers.gateway import ECommerceGateway
from payment_callback.models import (
    CallbackError,
    CallbackRequest,
    Decline,
    InvalidResponse,
    LookupFailure,
    StorageError,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/v1/callbacks")

STATUS_PAGE = """<!DOCTYPE html>
<html>
  <head><title>Payment status</title></head>
  <body>
    <h1>Thank you</h1>
    <p>Your payment is being processed. You will receive a confirmation once it is complete.</p>
  </body>
</html>
"""


def get_gateway(request: Request) -> ECommerceGateway:
    """Gateway built at application startup."""
    return request.app.state.gateway


Gateway = Annotated[ECommerceGateway, Depends(get_gateway)]


async def build_callback_request(request: Request) -> CallbackRequest:
    """Describe an HTTP request as a CallbackRequest.

    Repeated parameters keep their last value. Uploaded files are ignored;
    the processor only sends form-encoded strings.
    """
    body_params: dict[str, str] = {}
    if request.method == "POST":
        form = await request.form()
        body_params = {name: value for name, value in form.items() if isinstance(value, str)}

    return CallbackRequest(
        method=request.method,
        query_params=dict(request.query_params),
        body_params=body_params,
    )


@router.api_route("/return", methods=["GET", "POST"], response_class=HTMLResponse)
async def payment_return(request: Request, gateway: Gateway) -> HTMLResponse:
    """Buyer redirected back from the hosted payment page.

    The buyer always sees the same status page: the notification is the
    source of truth, so errors here are logged, not shown.
    """
    callback = await build_callback_request(request)
    try:
        await gateway.on_return(callback)
    except CallbackError as e:
        logger.warning(
            "return_callback_failed",
            error_type=type(e).__name__,
            error=str(e),
        )
    return HTMLResponse(content=STATUS_PAGE, status_code=200)


@router.get("/cancel", response_class=HTMLResponse)
async def payment_cancel(request: Request, gateway: Gateway) -> HTMLResponse:
    """Buyer cancelled on the hosted payment page."""
    await gateway.on_cancel(await build_callback_request(request))
    return HTMLResponse(content=STATUS_PAGE, status_code=200)


@router.api_route("/notify", methods=["GET", "POST"])
async def payment_notify(request: Request, gateway: Gateway) -> JSONResponse:
    """Server-to-server notification from the processor.

    Returns:
        200 when the outcome was recorded (including declines, which a
        redelivery cannot change)

    Raises:
        HTTPException: 400 invalid signature, 404 unknown payment,
            503 storage failure (the processor redelivers on non-2xx)
    """
    callback = await build_callback_request(request)
    try:
        record = await gateway.on_notify(callback)
    except Decline as e:
        return JSONResponse(
            status_code=200,
            content={
                "status": "declined",
                "payment_id": e.payment_id,
                "error_code": e.error_code,
            },
        )
    except InvalidResponse as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupFailure:
        raise HTTPException(status_code=404, detail="Payment not found")
    except StorageError as e:
        logger.error("notify_storage_failed", error=str(e))
        raise HTTPException(status_code=503, detail="Payment could not be stored")

    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "payment_id": record.payment_id,
            "state": record.state.value,
        },
    )
