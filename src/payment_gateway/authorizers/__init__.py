"""
Payment authorizer integrations.

- base.Authorizer: Abstract interface that all authorizers must implement
- bank_client.AcquiringBankClient: HTTP client for the acquiring bank
- mock_authorizer.MockAuthorizer: In-process mock mirroring the bank simulator
- factory: Authorizer factory for configuration-based selection

When the bank simulator's card rules change, update MockAuthorizer to match.
"""

from payment_gateway.authorizers.bank_client import AcquiringBankClient
from payment_gateway.authorizers.base import Authorizer
from payment_gateway.authorizers.factory import AuthorizerFactory, get_authorizer
from payment_gateway.authorizers.mock_authorizer import MockAuthorizer

__all__ = [
    "AcquiringBankClient",
    "Authorizer",
    "AuthorizerFactory",
    "MockAuthorizer",
    "get_authorizer",
]
