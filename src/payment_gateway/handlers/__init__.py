"""Payment processing handlers."""

from payment_gateway.handlers.processor import PaymentProcessor

__all__ = ["PaymentProcessor"]
