"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- A fixed clock and validator
- A fresh in-memory payment store per test
- Sample payment requests
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from payment_gateway.authorizers.base import Authorizer
from payment_gateway.handlers.processor import PaymentProcessor
from payment_gateway.infrastructure.payment_store import InMemoryPaymentStore
from payment_gateway.models import AuthorizationVerdict, Currency, PaymentRequest
from payment_gateway.validation.validator import PaymentRequestValidator


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed timestamp for deterministic expiry checks."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def validator(fixed_now):
    """Validator reading the fixed clock, with a 2024 expiry floor."""
    return PaymentRequestValidator(clock=lambda: fixed_now, min_expiry_year=2024)


@pytest.fixture
def store():
    """A fresh, isolated payment store."""
    return InMemoryPaymentStore()


@pytest.fixture
def valid_request():
    """A request that passes validation against the fixed clock."""
    return PaymentRequest(
        card_number="2222405343248877",
        expiry_month=4,
        expiry_year=2025,
        currency=Currency.GBP,
        amount=100,
        cvv="123",
    )


@pytest.fixture
def authorizer():
    """Authorizer double that authorizes every payment."""
    mock_authorizer = AsyncMock(spec=Authorizer)
    mock_authorizer.authorize = AsyncMock(
        return_value=AuthorizationVerdict(authorized=True, authorization_code="auth-123")
    )
    return mock_authorizer


@pytest.fixture
def processor(store, validator, authorizer):
    """Payment processor wired with the shared doubles."""
    return PaymentProcessor(store=store, validator=validator, authorizer=authorizer)
