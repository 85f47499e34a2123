"""
Core payment processing orchestration.

This module implements the workflow that ties the components together:
- Idempotency resolution against the payment store
- Request validation
- Authorization with the acquiring bank
- Classification of the verdict and recording of the payment

Idempotency caveat: resolution looks the key up in the store and, only if it
is absent, later inserts the finished record. The two steps are not atomic
as a pair. Two concurrent submissions with the same key can both pass the
lookup and both call the bank; the store keeps only the first record, yet
both callers receive Done. Enable key locking (KeyLockProvider) to
serialize submissions per key when at-most-one-attempt semantics are needed.
"""

import asyncio
import uuid

import structlog

from payment_gateway.authorizers.base import Authorizer
from payment_gateway.cancellation import raise_if_cancelled
from payment_gateway.infrastructure.locking import KeyLockProvider
from payment_gateway.infrastructure.payment_store import PaymentStore
from payment_gateway.models import (
    AuthorizerUnavailable,
    Done,
    Duplicate,
    IdempotencyResolution,
    PaymentRecord,
    PaymentRequest,
    PaymentStatus,
    ProcessingOutcome,
    Rejected,
    UseId,
    ValidationError,
)
from payment_gateway.validation.validator import PaymentRequestValidator

logger = structlog.get_logger(__name__)

AUTHORIZER_UNAVAILABLE_MESSAGE = "Acquiring bank is unavailable, please retry later."


class PaymentProcessor:
    """
    Processes card payments and serves recorded payments back.

    All collaborators are injected; the processor holds no global state of
    its own. The store is the only shared mutable resource.
    """

    def __init__(
        self,
        store: PaymentStore,
        validator: PaymentRequestValidator,
        authorizer: Authorizer,
        key_locks: KeyLockProvider | None = None,
    ) -> None:
        self.store = store
        self.validator = validator
        self.authorizer = authorizer
        self.key_locks = key_locks

    def lookup(self, payment_id: str) -> PaymentRecord | None:
        """Return the recorded payment for payment_id, or None."""
        return self.store.get(payment_id)

    def resolve_idempotency(self, supplied_id: str | None) -> IdempotencyResolution:
        """
        Decide which payment identifier to process under.

        A missing or blank key always proceeds under a freshly generated
        identifier. A supplied key is a duplicate only if a record exists
        under exactly that identifier; otherwise it is used verbatim.
        """
        if supplied_id is None or not supplied_id.strip():
            return UseId(str(uuid.uuid4()))

        existing = self.store.get(supplied_id)
        if existing is not None and existing.payment_id == supplied_id:
            logger.info("duplicate_payment_detected", payment_id=supplied_id)
            return Duplicate(supplied_id)

        return UseId(supplied_id)

    async def process(
        self,
        payment_id: str,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> ProcessingOutcome:
        """
        Validate, authorize and record a payment under a resolved identifier.

        Args:
            payment_id: Identifier returned by resolve_idempotency()
            request: The submitted payment
            cancel_event: Optional event tied to the caller's lifetime

        Returns:
            Rejected when validation fails or the bank is unavailable
            (nothing stored), otherwise Done with the recorded payment.

        Raises:
            OperationCancelled: cancel_event was set on entry or while
                waiting for the bank. Nothing is stored in that case.
        """
        raise_if_cancelled(cancel_event)

        errors = self.validator.validate(request)
        if errors:
            logger.info(
                "payment_rejected_validation",
                payment_id=payment_id,
                fields=sorted({error.field for error in errors}),
            )
            return Rejected(payment_id, errors)

        result = await self.authorizer.authorize(request, cancel_event)

        if isinstance(result, AuthorizerUnavailable):
            logger.error(
                "payment_rejected_authorizer_unavailable",
                payment_id=payment_id,
                reason=result.reason,
            )
            return Rejected(
                payment_id,
                [ValidationError("error", AUTHORIZER_UNAVAILABLE_MESSAGE)],
            )

        if result is not None and result.authorized:
            status = PaymentStatus.AUTHORIZED
        else:
            status = PaymentStatus.DECLINED

        record = PaymentRecord.create(payment_id, status, request)
        inserted = self.store.insert_if_absent(record)

        logger.info(
            "payment_processed",
            payment_id=payment_id,
            status=status.value,
            card_last_four=f"{record.last_four:04d}",
            stored=inserted,
        )

        return Done(payment_id, status, record)

    async def submit(
        self,
        supplied_id: str | None,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> Duplicate | ProcessingOutcome:
        """
        Resolve the idempotency key and process the payment.

        This is the entry point for the inbound request layer.

        Returns:
            Duplicate if the key already has a recorded payment, otherwise
            the outcome of process().
        """
        raise_if_cancelled(cancel_event)

        if self.key_locks is None or supplied_id is None or not supplied_id.strip():
            return await self._resolve_and_process(supplied_id, request, cancel_event)

        async with self.key_locks.acquire(supplied_id):
            return await self._resolve_and_process(supplied_id, request, cancel_event)

    async def _resolve_and_process(
        self,
        supplied_id: str | None,
        request: PaymentRequest,
        cancel_event: asyncio.Event | None,
    ) -> Duplicate | ProcessingOutcome:
        resolution = self.resolve_idempotency(supplied_id)
        if isinstance(resolution, Duplicate):
            return resolution

        return await self.process(resolution.payment_id, request, cancel_event)
