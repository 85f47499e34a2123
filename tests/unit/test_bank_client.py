"""Unit tests for the acquiring bank client."""

import asyncio
from unittest.mock import patch

import httpx
import pytest

from payment_gateway.authorizers.bank_client import AcquiringBankClient
from payment_gateway.models import (
    AuthorizationVerdict,
    AuthorizerUnavailable,
    OperationCancelled,
)

BANK_URL = "http://bank.test/payments"


def bank_response(status_code: int, **kwargs) -> httpx.Response:
    """Build a real httpx response bound to a request, as the client receives it."""
    return httpx.Response(status_code, request=httpx.Request("POST", BANK_URL), **kwargs)


@pytest.fixture
def client():
    """Create an acquiring bank client for testing."""
    return AcquiringBankClient(base_url="http://bank.test/", timeout_seconds=5.0)


@pytest.mark.asyncio
class TestAcquiringBankClientVerdicts:
    """Replies that carry (or lack) a verdict."""

    async def test_authorized_verdict(self, client, valid_request):
        response = bank_response(
            200, json={"authorized": True, "authorization_code": "0bb07405-6d44"}
        )

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

            assert result == AuthorizationVerdict(
                authorized=True, authorization_code="0bb07405-6d44"
            )

            # Verify request was made correctly
            client.http_client.post.assert_called_once()
            call_args = client.http_client.post.call_args

            assert call_args[0][0] == BANK_URL
            assert "X-Request-ID" in call_args[1]["headers"]
            assert call_args[1]["json"] == {
                "card_number": "2222405343248877",
                "expiry_date": "04/2025",
                "currency": "GBP",
                "amount": 100,
                "cvv": "123",
            }

    async def test_declined_verdict(self, client, valid_request):
        response = bank_response(200, json={"authorized": False, "authorization_code": ""})

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert result == AuthorizationVerdict(authorized=False, authorization_code="")

    async def test_null_body_is_absent_verdict(self, client, valid_request):
        response = bank_response(
            200, content=b"null", headers={"Content-Type": "application/json"}
        )

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert result is None

    async def test_reply_without_mark_is_not_authorized(self, client, valid_request):
        response = bank_response(200, json={"authorization_code": "abc"})

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert result.authorized is False


@pytest.mark.asyncio
class TestAcquiringBankClientFailures:
    """Every transport failure collapses into AuthorizerUnavailable."""

    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    async def test_error_status(self, client, valid_request, status_code):
        response = bank_response(status_code, json={"error": "nope"})

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert isinstance(result, AuthorizerUnavailable)
        assert str(status_code) in result.reason

    async def test_malformed_json_body(self, client, valid_request):
        response = bank_response(200, content=b"<html>oops</html>")

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert isinstance(result, AuthorizerUnavailable)

    async def test_wrong_body_shape(self, client, valid_request):
        response = bank_response(200, json=["authorized"])

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert isinstance(result, AuthorizerUnavailable)

    @pytest.mark.parametrize("mark", ["yes", 1])
    async def test_non_boolean_mark_is_malformed(self, client, valid_request, mark):
        response = bank_response(200, json={"authorized": mark, "authorization_code": "abc"})

        with patch.object(client.http_client, "post", return_value=response):
            result = await client.authorize(valid_request)

        assert result == AuthorizerUnavailable(
            "Acquiring bank returned a malformed response"
        )

    async def test_timeout(self, client, valid_request):
        with patch.object(
            client.http_client, "post", side_effect=httpx.ReadTimeout("Timeout")
        ):
            result = await client.authorize(valid_request)

        assert result == AuthorizerUnavailable("Acquiring bank timeout")

    async def test_connection_error(self, client, valid_request):
        with patch.object(
            client.http_client, "post", side_effect=httpx.ConnectError("Connection refused")
        ):
            result = await client.authorize(valid_request)

        assert isinstance(result, AuthorizerUnavailable)
        assert "Connection refused" in result.reason


@pytest.mark.asyncio
class TestAcquiringBankClientCancellation:
    async def test_already_cancelled_does_not_call_bank(self, client, valid_request):
        cancel_event = asyncio.Event()
        cancel_event.set()

        with patch.object(client.http_client, "post") as mock_post:
            with pytest.raises(OperationCancelled):
                await client.authorize(valid_request, cancel_event)

            mock_post.assert_not_called()

    async def test_cancel_event_aborts_outstanding_call(self, client, valid_request):
        call_started = asyncio.Event()
        call_aborted = asyncio.Event()

        async def slow_post(*args, **kwargs):
            call_started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                call_aborted.set()
                raise

        cancel_event = asyncio.Event()

        with patch.object(client.http_client, "post", side_effect=slow_post):
            task = asyncio.create_task(client.authorize(valid_request, cancel_event))
            await call_started.wait()
            cancel_event.set()

            with pytest.raises(OperationCancelled):
                await asyncio.wait_for(task, timeout=1)

        assert call_aborted.is_set()

    async def test_task_cancellation_propagates(self, client, valid_request):
        call_started = asyncio.Event()

        async def slow_post(*args, **kwargs):
            call_started.set()
            await asyncio.sleep(30)

        with patch.object(client.http_client, "post", side_effect=slow_post):
            task = asyncio.create_task(client.authorize(valid_request))
            await call_started.wait()
            task.cancel()

            with pytest.raises(asyncio.CancelledError):
                await task


@pytest.mark.asyncio
async def test_close_closes_http_client(client):
    await client.close()

    assert client.http_client.is_closed
