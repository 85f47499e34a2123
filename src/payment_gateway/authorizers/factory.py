"""
Authorizer factory for creating authorizer instances.

Selects the authorizer implementation by name so the gateway can talk to
the real acquiring bank in deployed environments and to the in-process
mock when running locally.
"""

from typing import Any

import structlog

from payment_gateway.authorizers.bank_client import AcquiringBankClient
from payment_gateway.authorizers.base import Authorizer
from payment_gateway.authorizers.mock_authorizer import MockAuthorizer
from payment_gateway.config import Settings, settings

logger = structlog.get_logger(__name__)


class AuthorizerFactory:
    """Factory for creating authorizer instances by name."""

    # Registry of available authorizers
    _AUTHORIZERS: dict[str, type[Authorizer]] = {
        "bank": AcquiringBankClient,
        "mock": MockAuthorizer,
    }

    @classmethod
    def create_authorizer(
        cls,
        authorizer_name: str,
        authorizer_config: dict[str, Any] | None = None,
        app_settings: Settings | None = None,
    ) -> Authorizer:
        """
        Create an authorizer instance by name.

        Args:
            authorizer_name: Name of the authorizer ("bank" or "mock")
            authorizer_config: Optional authorizer-specific configuration.
                             If not provided, uses settings from global config.
            app_settings: Settings to read defaults from (default: global settings)

        Returns:
            Authorizer instance ready to authorize payments

        Raises:
            ValueError: If authorizer_name is not registered

        Examples:
            authorizer = AuthorizerFactory.create_authorizer("bank")

            authorizer = AuthorizerFactory.create_authorizer(
                "bank",
                authorizer_config={"base_url": "http://bank:8080", "timeout_seconds": 5},
            )
        """
        name = authorizer_name.lower()

        if name not in cls._AUTHORIZERS:
            available = ", ".join(cls.list_authorizers())
            raise ValueError(
                f"Unknown authorizer: {authorizer_name}. "
                f"Available authorizers: {available}"
            )

        authorizer_class = cls._AUTHORIZERS[name]

        # Explicit config overrides the defaults loaded from settings
        defaults = cls._get_default_config(name, app_settings or settings)
        config = {**defaults, **(authorizer_config or {})}

        logger.info(
            "authorizer_created",
            authorizer_name=name,
            authorizer_class=authorizer_class.__name__,
        )

        return authorizer_class(**config)

    @classmethod
    def _get_default_config(
        cls, authorizer_name: str, app_settings: Settings
    ) -> dict[str, Any]:
        if authorizer_name == "bank":
            return {
                "base_url": app_settings.bank.base_url,
                "timeout_seconds": app_settings.bank.timeout_seconds,
            }
        elif authorizer_name == "mock":
            return {"latency_ms": app_settings.mock_latency_ms}
        else:
            return {}

    @classmethod
    def register_authorizer(
        cls,
        name: str,
        authorizer_class: type[Authorizer],
    ) -> None:
        """
        Register a new authorizer type.

        Args:
            name: Name to register the authorizer under
            authorizer_class: Authorizer subclass to register
        """
        if not issubclass(authorizer_class, Authorizer):
            raise TypeError(
                f"{authorizer_class.__name__} must inherit from Authorizer"
            )

        cls._AUTHORIZERS[name.lower()] = authorizer_class
        logger.info(
            "authorizer_registered",
            authorizer_name=name.lower(),
            authorizer_class=authorizer_class.__name__,
        )

    @classmethod
    def list_authorizers(cls) -> list[str]:
        """Get sorted list of available authorizer names."""
        return sorted(cls._AUTHORIZERS.keys())


def get_authorizer(
    authorizer_name: str | None = None,
    authorizer_config: dict[str, Any] | None = None,
    app_settings: Settings | None = None,
) -> Authorizer:
    """
    Convenience function to create an authorizer.

    Args:
        authorizer_name: Name of authorizer (defaults to settings.authorizer)
        authorizer_config: Optional authorizer-specific config
        app_settings: Settings to read defaults from (default: global settings)

    Returns:
        Authorizer instance
    """
    app_settings = app_settings or settings
    if authorizer_name is None:
        authorizer_name = app_settings.authorizer

    return AuthorizerFactory.create_authorizer(
        authorizer_name, authorizer_config, app_settings
    )
