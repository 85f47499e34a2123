"""/api/payments endpoints."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from payment_gateway.api.dependencies import get_payment_processor
from payment_gateway.api.models import (
    PaymentRequestJSON,
    PaymentResponseJSON,
    RejectedResponseJSON,
)
from payment_gateway.handlers.processor import PaymentProcessor
from payment_gateway.models import Duplicate, OperationCancelled, Rejected

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])

# Non-standard status used by proxies for a client that went away mid-request.
CLIENT_CLOSED_REQUEST = 499

DISCONNECT_POLL_INTERVAL_SECONDS = 0.1


async def watch_disconnect(
    request: Request,
    cancel_event: asyncio.Event,
    poll_interval: float = DISCONNECT_POLL_INTERVAL_SECONDS,
) -> None:
    """Set cancel_event once the client disconnects. Runs until cancelled."""
    while not await request.is_disconnected():
        await asyncio.sleep(poll_interval)

    logger.info("client_disconnected", path=request.url.path)
    cancel_event.set()


@router.get("/{payment_id}", response_model=PaymentResponseJSON)
async def get_payment(
    payment_id: str,
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> PaymentResponseJSON:
    """Fetch a previously processed payment.

    Raises:
        HTTPException: 404 if no payment exists under payment_id
    """
    record = processor.lookup(payment_id)
    if record is None:
        logger.info("payment_not_found", payment_id=payment_id)
        raise HTTPException(status_code=404, detail="Payment not found")

    return PaymentResponseJSON.from_record(record)


@router.post("")
async def process_payment(
    request: Request,
    payment: PaymentRequestJSON,
    idempotency_key: str | None = Header(default=None, alias="Cko-Idempotency-Key"),
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> JSONResponse:
    """Submit a card payment for processing.

    The optional Cko-Idempotency-Key header makes retries safe: a key that
    already has a recorded payment is refused with 429.

    Returns:
        200 with the payment when the bank authorized or declined it,
        400 with field errors when it was rejected,
        429 when the idempotency key was already used,
        499 when the client disconnected before the bank answered
    """
    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, cancel_event))
    try:
        outcome = await processor.submit(
            idempotency_key, payment.to_payment_request(), cancel_event
        )
    except OperationCancelled:
        logger.info("payment_request_cancelled", idempotency_key=idempotency_key)
        return JSONResponse(
            status_code=CLIENT_CLOSED_REQUEST,
            content={"detail": "Client closed request"},
        )
    finally:
        watcher.cancel()

    if isinstance(outcome, Duplicate):
        return JSONResponse(
            status_code=429,
            content={"detail": "Duplicate request detected"},
        )

    if isinstance(outcome, Rejected):
        return JSONResponse(
            status_code=400,
            content=RejectedResponseJSON.from_outcome(outcome).model_dump(),
        )

    return JSONResponse(
        status_code=200,
        content=PaymentResponseJSON.from_record(outcome.record).model_dump(),
    )
