"""Tests for the Dizparos SMS adapter (sync, no network, no DB)."""

import json
from unittest.mock import MagicMock
from uuid import uuid4

import httpx
import pytest

from smsdash.sms.adapters.dizparos import DizparosAdapter
from smsdash.sms.config import ProviderType, SmsConfig
from smsdash.sms.interface import SmsSendError, SmsSendRequest


@pytest.fixture
def dizparos_config() -> SmsConfig:
    return SmsConfig(
        provider_type=ProviderType.DIZPAROS,
        dizparos_api_url="https://api.dizparos.test/v1/",
        dizparos_api_token="tok_test_123",
    )


@pytest.fixture
def sms_request() -> SmsSendRequest:
    return SmsSendRequest(to="5511999990000", message="Olá Ana", lead_id=uuid4())


def _client_returning(response: httpx.Response) -> MagicMock:
    client = MagicMock(spec=httpx.Client)
    client.post.return_value = response
    return client


class TestDizparosAdapterSendSync:
    def test_send_success(self, dizparos_config: SmsConfig, sms_request: SmsSendRequest) -> None:
        client = _client_returning(httpx.Response(200, json={"reference": "DZ-1", "status": "queued"}))

        adapter = DizparosAdapter(config=dizparos_config, http_client=client)
        response = adapter.send_sms_sync(sms_request)

        assert response.reference == "DZ-1"
        assert response.raw_response["status"] == "queued"

        client.post.assert_called_once()
        args, kwargs = client.post.call_args
        assert args[0] == "https://api.dizparos.test/v1/messaging/send"
        assert kwargs["headers"]["Authorization"] == "Bearer tok_test_123"
        assert kwargs["json"] == {
            "channel": "sms",
            "details": [{"to": "5511999990000", "message": "Olá Ana"}],
        }

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            ({"id": "ID-7"}, "ID-7"),
            ({"data": {"reference": "NESTED-3"}}, "NESTED-3"),
            ({"reference": "TOP", "id": "ID"}, "TOP"),
            ({"ok": True}, None),
        ],
    )
    def test_reference_extraction(
        self,
        dizparos_config: SmsConfig,
        sms_request: SmsSendRequest,
        body: dict,
        expected: str | None,
    ) -> None:
        adapter = DizparosAdapter(
            config=dizparos_config,
            http_client=_client_returning(httpx.Response(201, json=body)),
        )
        assert adapter.send_sms_sync(sms_request).reference == expected

    def test_provider_error(self, dizparos_config: SmsConfig, sms_request: SmsSendRequest) -> None:
        client = _client_returning(httpx.Response(422, json={"error": "Invalid phone"}))
        adapter = DizparosAdapter(config=dizparos_config, http_client=client)

        with pytest.raises(SmsSendError) as exc_info:
            adapter.send_sms_sync(sms_request)

        assert str(exc_info.value) == "Invalid phone"
        assert exc_info.value.error_code == "422"
        assert exc_info.value.provider_response == {"error": "Invalid phone"}

    def test_provider_error_without_body(
        self,
        dizparos_config: SmsConfig,
        sms_request: SmsSendRequest,
    ) -> None:
        client = _client_returning(httpx.Response(500, content=b"upstream down"))
        adapter = DizparosAdapter(config=dizparos_config, http_client=client)

        with pytest.raises(SmsSendError, match="Failed to send SMS"):
            adapter.send_sms_sync(sms_request)

    def test_transport_error(self, dizparos_config: SmsConfig, sms_request: SmsSendRequest) -> None:
        client = MagicMock(spec=httpx.Client)
        client.post.side_effect = httpx.ConnectError("connection refused")
        adapter = DizparosAdapter(config=dizparos_config, http_client=client)

        with pytest.raises(SmsSendError) as exc_info:
            adapter.send_sms_sync(sms_request)

        assert exc_info.value.error_code == "HTTP_ERROR"
        assert "connection refused" in str(exc_info.value)

    def test_missing_token(self, sms_request: SmsSendRequest) -> None:
        client = MagicMock(spec=httpx.Client)
        adapter = DizparosAdapter(config=SmsConfig(dizparos_api_token=""), http_client=client)

        with pytest.raises(SmsSendError, match="API token not configured"):
            adapter.send_sms_sync(sms_request)
        client.post.assert_not_called()


class TestDizparosAdapterTransport:
    def test_mock_transport_round_trip(self, dizparos_config: SmsConfig, sms_request: SmsSendRequest) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "T-1"})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        adapter = DizparosAdapter(config=dizparos_config, http_client=client)

        assert adapter.send_sms_sync(sms_request).reference == "T-1"
        assert json.loads(seen[0].content)["channel"] == "sms"

        # injected clients belong to the caller
        adapter.close()
        assert not client.is_closed
        client.close()

    @pytest.mark.asyncio
    async def test_async_send_delegates_to_sync(
        self,
        dizparos_config: SmsConfig,
        sms_request: SmsSendRequest,
    ) -> None:
        client = _client_returning(httpx.Response(200, json={"reference": "ASYNC-1"}))
        adapter = DizparosAdapter(config=dizparos_config, http_client=client)

        response = await adapter.send_sms(sms_request)

        assert response.reference == "ASYNC-1"
