"""Request validation."""

from payment_gateway.validation.validator import (
    DEFAULT_MIN_EXPIRY_YEAR,
    PaymentRequestValidator,
    utc_now,
)

__all__ = ["DEFAULT_MIN_EXPIRY_YEAR", "PaymentRequestValidator", "utc_now"]
