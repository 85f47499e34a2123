"""
Mock authorizer for local runs and end-to-end tests.

Mirrors the acquiring bank simulator so the gateway can run without the
bank container. The verdict is chosen from the last digit of the card
number:

- odd digit (1, 3, 5, 7, 9): authorized, with a random authorization code
- even digit (2, 4, 6, 8): declined
- zero: bank unavailable (the simulator answers 503)
"""

import asyncio
import uuid

import structlog

from payment_gateway.authorizers.base import Authorizer
from payment_gateway.cancellation import raise_if_cancelled, run_cancellable
from payment_gateway.models import (
    AuthorizationResult,
    AuthorizationVerdict,
    AuthorizerUnavailable,
    PaymentRequest,
)

logger = structlog.get_logger(__name__)


class MockAuthorizer(Authorizer):
    """
    In-process stand-in for the acquiring bank.

    Args:
        latency_ms: Simulated network latency in milliseconds (default: 0)
    """

    def __init__(self, latency_ms: int = 0) -> None:
        self.latency_ms = latency_ms

        logger.info("mock_authorizer_initialized", latency_ms=latency_ms)

    async def authorize(
        self,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> AuthorizationResult:
        raise_if_cancelled(cancel_event)

        if self.latency_ms > 0:
            await run_cancellable(asyncio.sleep(self.latency_ms / 1000.0), cancel_event)

        card_number = request.card_number or ""
        last_digit = card_number[-1:]

        if last_digit == "0":
            logger.warning("mock_bank_unavailable", card_last_four=card_number[-4:])
            return AuthorizerUnavailable("Mock bank unavailable (status: 503)")

        if last_digit in ("1", "3", "5", "7", "9"):
            authorization_code = str(uuid.uuid4())
            logger.info(
                "mock_authorization_success",
                card_last_four=card_number[-4:],
                amount=request.amount,
            )
            return AuthorizationVerdict(
                authorized=True,
                authorization_code=authorization_code,
            )

        logger.info("mock_card_declined", card_last_four=card_number[-4:])
        return AuthorizationVerdict(authorized=False, authorization_code="")
