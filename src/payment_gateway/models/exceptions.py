"""Custom exceptions for the Payment Gateway.

Business outcomes (validation failures, declines, an unreachable bank) are
returned as values and never raised. The exceptions below are faults or
control signals that terminate a single request.
"""


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""

    pass


class OperationCancelled(PaymentGatewayError):
    """
    Raised when the caller's cancel event is set.

    Checked on entry to processing and while waiting on the authorizer.
    Never converted into a Rejected outcome.
    """

    pass


class InvalidPaymentRecordError(PaymentGatewayError):
    """
    Raised when a PaymentRecord cannot be built from its inputs.

    This indicates a programming error: records are only built after the
    request has passed validation.
    """

    pass
