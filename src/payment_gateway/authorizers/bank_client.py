"""Acquiring bank client for card payment authorization."""

import asyncio
import uuid

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from payment_gateway.authorizers.base import Authorizer
from payment_gateway.cancellation import raise_if_cancelled, run_cancellable
from payment_gateway.models import (
    AuthorizationResult,
    AuthorizerUnavailable,
    BankPaymentRequest,
    BankPaymentResponse,
    PaymentRequest,
)

logger = structlog.get_logger(__name__)


class AcquiringBankClient(Authorizer):
    """
    Client for calling the acquiring bank's /payments endpoint.

    The payment request is normalized (MM/YYYY expiry, three-letter currency
    code) and sent as JSON. Every kind of transport trouble is folded into a
    single AuthorizerUnavailable value; the caller only learns whether a
    verdict was obtained.

    The client never retries. Retrying is a policy for whoever calls the
    gateway.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the acquiring bank client.

        Args:
            base_url: Base URL of the bank (e.g., "http://localhost:8080")
            timeout_seconds: Transport timeout in seconds (default: 10.0)
            http_client: Optional preconfigured client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

        logger.info(
            "acquiring_bank_client_initialized",
            base_url=self.base_url,
            timeout_seconds=timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def authorize(
        self,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> AuthorizationResult:
        """
        Send a payment to the bank for authorization.

        Args:
            request: Validated payment request
            cancel_event: Optional event; setting it aborts the HTTP call

        Returns:
            AuthorizationVerdict parsed from the reply, None if the bank
            replied with an empty (null) body, or AuthorizerUnavailable on
            any transport failure.

        Raises:
            OperationCancelled: cancel_event was set before the reply arrived
        """
        raise_if_cancelled(cancel_event)

        correlation_id = str(uuid.uuid4())
        payload = BankPaymentRequest.from_payment_request(request)
        url = f"{self.base_url}/payments"

        logger.info(
            "bank_authorization_request",
            correlation_id=correlation_id,
            card_last_four=payload.card_number[-4:],
            currency=payload.currency,
            amount=payload.amount,
            url=url,
        )

        try:
            response = await run_cancellable(
                self.http_client.post(
                    url,
                    headers={"X-Request-ID": correlation_id},
                    json=payload.model_dump(),
                ),
                cancel_event,
            )
            response.raise_for_status()

            body = response.json()
            if body is None:
                logger.warning(
                    "bank_authorization_empty_response",
                    correlation_id=correlation_id,
                )
                return None

            verdict = BankPaymentResponse.model_validate(body).to_verdict()

        except httpx.TimeoutException as e:
            logger.error(
                "bank_authorization_timeout",
                correlation_id=correlation_id,
                error=str(e),
            )
            return AuthorizerUnavailable("Acquiring bank timeout")

        except httpx.HTTPStatusError as e:
            logger.error(
                "bank_authorization_error_status",
                correlation_id=correlation_id,
                status_code=e.response.status_code,
            )
            return AuthorizerUnavailable(
                f"Acquiring bank unavailable (status: {e.response.status_code})"
            )

        except httpx.HTTPError as e:
            # Network errors, connection errors, etc.
            logger.error(
                "bank_authorization_request_error",
                correlation_id=correlation_id,
                error=str(e),
            )
            return AuthorizerUnavailable(f"Acquiring bank request error: {e}")

        except (ValueError, PydanticValidationError) as e:
            logger.error(
                "bank_authorization_malformed_response",
                correlation_id=correlation_id,
                error=str(e),
            )
            return AuthorizerUnavailable("Acquiring bank returned a malformed response")

        logger.info(
            "bank_authorization_verdict",
            correlation_id=correlation_id,
            authorized=verdict.authorized,
        )
        return verdict

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
