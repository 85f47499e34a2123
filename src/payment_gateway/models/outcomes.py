"""Typed results of idempotency resolution and payment processing."""

from dataclasses import dataclass, field

from payment_gateway.models.payment import PaymentRecord, PaymentStatus, ValidationError


@dataclass(frozen=True)
class Duplicate:
    """A record already exists under the supplied idempotency key."""

    payment_id: str


@dataclass(frozen=True)
class UseId:
    """Processing may proceed under this payment identifier."""

    payment_id: str


IdempotencyResolution = Duplicate | UseId


@dataclass(frozen=True)
class Rejected:
    """
    The payment was not processed.

    Either the request failed validation, or the bank could not be reached
    (a single synthetic error under the "error" field). Nothing is stored.
    """

    payment_id: str
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def status(self) -> PaymentStatus:
        return PaymentStatus.REJECTED


@dataclass(frozen=True)
class Done:
    """The bank returned a verdict and the payment was recorded."""

    payment_id: str
    status: PaymentStatus
    record: PaymentRecord


ProcessingOutcome = Rejected | Done
