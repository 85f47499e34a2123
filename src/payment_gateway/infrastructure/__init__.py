"""Infrastructure: payment storage and locking."""

from payment_gateway.infrastructure.locking import KeyLockProvider
from payment_gateway.infrastructure.payment_store import InMemoryPaymentStore, PaymentStore

__all__ = ["InMemoryPaymentStore", "KeyLockProvider", "PaymentStore"]
