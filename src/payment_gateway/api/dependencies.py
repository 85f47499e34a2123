"""FastAPI dependencies: wiring of the payment processor from settings."""

import structlog

from payment_gateway.authorizers.factory import get_authorizer
from payment_gateway.config import Settings, settings
from payment_gateway.handlers.processor import PaymentProcessor
from payment_gateway.infrastructure.locking import KeyLockProvider
from payment_gateway.infrastructure.payment_store import InMemoryPaymentStore
from payment_gateway.validation.validator import PaymentRequestValidator

logger = structlog.get_logger(__name__)

_processor: PaymentProcessor | None = None


def build_payment_processor(app_settings: Settings = settings) -> PaymentProcessor:
    """Create a payment processor with its own store from settings."""
    processor = PaymentProcessor(
        store=InMemoryPaymentStore(),
        validator=PaymentRequestValidator(
            min_expiry_year=app_settings.validation.min_expiry_year,
        ),
        authorizer=get_authorizer(app_settings.authorizer, app_settings=app_settings),
        key_locks=KeyLockProvider() if app_settings.idempotency_key_locking else None,
    )

    logger.info(
        "payment_processor_built",
        authorizer=app_settings.authorizer,
        idempotency_key_locking=app_settings.idempotency_key_locking,
    )
    return processor


def get_payment_processor() -> PaymentProcessor:
    """Return the process-wide payment processor, building it on first use."""
    global _processor
    if _processor is None:
        _processor = build_payment_processor()
    return _processor


async def close_payment_processor() -> None:
    """Release the authorizer's resources and forget the processor."""
    global _processor
    if _processor is not None:
        await _processor.authorizer.close()
        _processor = None
