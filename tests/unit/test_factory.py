"""Unit tests for AuthorizerFactory."""

from unittest.mock import patch

import pytest

from payment_gateway.authorizers import (
    AcquiringBankClient,
    Authorizer,
    AuthorizerFactory,
    MockAuthorizer,
    get_authorizer,
)
from payment_gateway.config import BankSettings, Settings, settings


class TestAuthorizerFactory:
    def test_list_authorizers(self):
        assert AuthorizerFactory.list_authorizers() == ["bank", "mock"]

    def test_create_bank_client_from_settings(self):
        authorizer = AuthorizerFactory.create_authorizer("bank")

        assert isinstance(authorizer, AcquiringBankClient)
        assert authorizer.base_url == settings.bank.base_url.rstrip("/")
        assert authorizer.timeout_seconds == settings.bank.timeout_seconds

    def test_explicit_config_overrides_settings(self):
        authorizer = AuthorizerFactory.create_authorizer(
            "bank",
            authorizer_config={"base_url": "http://bank:8080/", "timeout_seconds": 2.5},
        )

        assert authorizer.base_url == "http://bank:8080"
        assert authorizer.timeout_seconds == 2.5

    def test_name_is_case_insensitive(self):
        assert isinstance(AuthorizerFactory.create_authorizer("MOCK"), MockAuthorizer)

    def test_mock_latency_from_config(self):
        authorizer = AuthorizerFactory.create_authorizer(
            "mock", authorizer_config={"latency_ms": 25}
        )

        assert authorizer.latency_ms == 25

    def test_unknown_authorizer(self):
        with pytest.raises(ValueError, match="Unknown authorizer: stripe"):
            AuthorizerFactory.create_authorizer("stripe")

    def test_register_authorizer(self):
        class AlwaysDecline(Authorizer):
            async def authorize(self, request, cancel_event=None):
                return None

        with patch.dict(AuthorizerFactory._AUTHORIZERS):
            AuthorizerFactory.register_authorizer("Decline", AlwaysDecline)

            assert "decline" in AuthorizerFactory.list_authorizers()
            assert isinstance(AuthorizerFactory.create_authorizer("decline"), AlwaysDecline)

        assert "decline" not in AuthorizerFactory.list_authorizers()

    def test_register_rejects_non_authorizer(self):
        class NotAnAuthorizer:
            pass

        with pytest.raises(TypeError):
            AuthorizerFactory.register_authorizer("bogus", NotAnAuthorizer)


class TestGetAuthorizer:
    def test_defaults_to_configured_authorizer(self):
        with patch.object(settings, "authorizer", "mock"):
            assert isinstance(get_authorizer(), MockAuthorizer)

    def test_named_authorizer(self):
        assert isinstance(get_authorizer("bank"), AcquiringBankClient)


class TestSettingsOverride:
    def test_defaults_come_from_given_settings(self):
        app_settings = Settings(
            _env_file=None,
            bank=BankSettings(base_url="http://other-bank:9999", timeout_seconds=1.5),
        )

        authorizer = AuthorizerFactory.create_authorizer("bank", app_settings=app_settings)

        assert authorizer.base_url == "http://other-bank:9999"
        assert authorizer.timeout_seconds == 1.5

    def test_get_authorizer_reads_name_from_given_settings(self):
        app_settings = Settings(_env_file=None, authorizer="mock", mock_latency_ms=40)

        authorizer = get_authorizer(app_settings=app_settings)

        assert isinstance(authorizer, MockAuthorizer)
        assert authorizer.latency_ms == 40
