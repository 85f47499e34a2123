"""Base interface for payment authorizers."""

import asyncio
from abc import ABC, abstractmethod

from payment_gateway.models import AuthorizationResult, PaymentRequest


class Authorizer(ABC):
    """
    Abstract base class for the external system that approves card payments.

    Implementations (the acquiring bank over HTTP, the in-process mock) must
    honour the same contract so the payment processor can treat them alike.
    """

    @abstractmethod
    async def authorize(
        self,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> AuthorizationResult:
        """
        Ask the authorizer for a verdict on a validated payment request.

        Args:
            request: A payment request that has already passed validation
            cancel_event: Optional event; setting it aborts the call

        Returns:
            AuthorizationVerdict when a verdict was obtained, None when the
            authorizer replied without one, or AuthorizerUnavailable when no
            verdict could be obtained at all.

        Raises:
            OperationCancelled: cancel_event was set during the call.

        Note:
            Declines and transport failures are NOT exceptions. They are
            returned as values so the processor can classify them.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the authorizer."""
        return None
