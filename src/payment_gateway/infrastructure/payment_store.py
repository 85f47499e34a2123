"""In-memory payment store.

The store is the only shared mutable state in the gateway. It is volatile:
records live for the lifetime of the process and are never updated or
deleted.
"""

import threading
from abc import ABC, abstractmethod

import structlog

from payment_gateway.models import PaymentRecord

logger = structlog.get_logger(__name__)


class PaymentStore(ABC):
    """
    Interface for finalized payment records keyed by payment identifier.

    Contract:
    - insert_if_absent() is atomic: for a given payment_id the first writer
      wins and every later insert observably fails (returns False)
    - get() returns None if the payment does not exist (no exception)
    - Records are immutable; there is no update or delete
    - Safe for concurrent use without external locking
    """

    @abstractmethod
    def insert_if_absent(self, record: PaymentRecord) -> bool:
        """
        Store a record unless one already exists under its payment_id.

        Returns:
            True if the record was inserted, False if the id was taken.
        """

    @abstractmethod
    def get(self, payment_id: str) -> PaymentRecord | None:
        """Look up a record by its exact payment_id."""


class InMemoryPaymentStore(PaymentStore):
    """
    Dict-backed payment store guarded by a lock.

    The lock is held only for the dictionary operation itself, never
    across an authorizer call. PaymentRecord is a frozen dataclass, so the
    stored instance is handed out directly as a read-only view.
    """

    def __init__(self) -> None:
        self._records: dict[str, PaymentRecord] = {}
        self._lock = threading.Lock()

    def insert_if_absent(self, record: PaymentRecord) -> bool:
        with self._lock:
            if record.payment_id in self._records:
                inserted = False
            else:
                self._records[record.payment_id] = record
                inserted = True

        if not inserted:
            logger.warning(
                "payment_record_already_exists",
                payment_id=record.payment_id,
            )
        return inserted

    def get(self, payment_id: str) -> PaymentRecord | None:
        with self._lock:
            return self._records.get(payment_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
