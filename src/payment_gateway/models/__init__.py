"""Domain models for the Payment Gateway."""

from payment_gateway.models.authorization import (
    AuthorizationResult,
    AuthorizationVerdict,
    AuthorizerUnavailable,
    BankPaymentRequest,
    BankPaymentResponse,
)
from payment_gateway.models.exceptions import (
    InvalidPaymentRecordError,
    OperationCancelled,
    PaymentGatewayError,
)
from payment_gateway.models.outcomes import (
    Done,
    Duplicate,
    IdempotencyResolution,
    ProcessingOutcome,
    Rejected,
    UseId,
)
from payment_gateway.models.payment import (
    Currency,
    PaymentRecord,
    PaymentRequest,
    PaymentStatus,
    ValidationError,
)

__all__ = [
    "AuthorizationResult",
    "AuthorizationVerdict",
    "AuthorizerUnavailable",
    "BankPaymentRequest",
    "BankPaymentResponse",
    "Currency",
    "Done",
    "Duplicate",
    "IdempotencyResolution",
    "InvalidPaymentRecordError",
    "OperationCancelled",
    "PaymentGatewayError",
    "PaymentRecord",
    "PaymentRequest",
    "PaymentStatus",
    "ProcessingOutcome",
    "Rejected",
    "UseId",
    "ValidationError",
]
