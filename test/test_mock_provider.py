"""Tests for the mock SMS provider."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from smsdash.sms.adapters.mock import MockSmsProvider
from smsdash.sms.interface import SmsSendError, SmsSendRequest
from smsdash.webhooks.events import DizparosStatusCode


@pytest.fixture
def provider() -> MockSmsProvider:
    return MockSmsProvider()


def test_records_requests_and_numbers_references(provider: MockSmsProvider) -> None:
    first = provider.send_sms_sync(SmsSendRequest(to="5511900000001", message="a"))
    second = provider.send_sms_sync(SmsSendRequest(to="5511900000002", message="b"))

    assert first.reference == "MOCK_SMS_000001"
    assert second.reference == "MOCK_SMS_000002"
    assert [r.to for r in provider.requests] == ["5511900000001", "5511900000002"]
    assert provider.get_last_request().message == "b"


def test_configured_failure(provider: MockSmsProvider) -> None:
    provider.configure_failure(error_message="quota exceeded", error_code="QUOTA")

    with pytest.raises(SmsSendError) as exc_info:
        provider.send_sms_sync(SmsSendRequest(to="5511900000001", message="a"))

    assert exc_info.value.error_code == "QUOTA"
    assert provider.requests == []


def test_failure_limited_to_numbers(provider: MockSmsProvider) -> None:
    provider.configure_failure(numbers={"5511900000002"})

    provider.send_sms_sync(SmsSendRequest(to="5511900000001", message="a"))
    with pytest.raises(SmsSendError):
        provider.send_sms_sync(SmsSendRequest(to="5511900000002", message="b"))


def test_reset(provider: MockSmsProvider) -> None:
    provider.configure_failure()
    provider.reset()

    response = provider.send_sms_sync(SmsSendRequest(to="5511900000001", message="a"))
    assert response.reference == "MOCK_SMS_000001"


def test_generate_status_webhook(provider: MockSmsProvider) -> None:
    body = provider.generate_status_webhook("MOCK_SMS_000001", DizparosStatusCode.NOT_DELIVERED, "Not delivered")

    assert body["type"] == 2003
    assert body["data"] == {"reference": "MOCK_SMS_000001"}
    assert body["webhook_event_id"].startswith("evt_")


def test_concurrent_sends_get_unique_references(provider: MockSmsProvider) -> None:
    requests = [SmsSendRequest(to=f"55119000{i:05d}", message="x") for i in range(200)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        responses = list(pool.map(provider.send_sms_sync, requests))

    references = {r.reference for r in responses}
    assert len(references) == 200
    assert len(provider.requests) == 200
    assert max(references) == "MOCK_SMS_000200"
