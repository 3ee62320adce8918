"""
Mock SMS provider for tests and local runs.
"""

import threading
from typing import Any

from smsdash.shared.formatting import generate_webhook_event_id
from smsdash.shared.logging import get_logger
from smsdash.sms.interface import SmsProvider, SmsSendError, SmsSendRequest, SmsSendResponse
from smsdash.webhooks.events import DizparosStatusCode

logger = get_logger(__name__)


class MockSmsProvider(SmsProvider):
    """In-memory provider that records every request."""

    def __init__(self) -> None:
        # sends run on anyio worker threads
        self._lock = threading.Lock()
        self._requests: list[SmsSendRequest] = []
        self._next_id: int = 1
        self._should_fail: bool = False
        self._fail_error: str = "Mock failure"
        self._fail_code: str = "MOCK_ERROR"
        self._fail_numbers: set[str] = set()

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()
            self._next_id = 1
        self._should_fail = False
        self._fail_error = "Mock failure"
        self._fail_code = "MOCK_ERROR"
        self._fail_numbers.clear()

    def configure_failure(
        self,
        should_fail: bool = True,
        error_message: str = "Mock failure",
        error_code: str = "MOCK_ERROR",
        numbers: set[str] | None = None,
    ) -> None:
        """Fail every send, or only sends to ``numbers`` when given."""
        self._should_fail = should_fail
        self._fail_error = error_message
        self._fail_code = error_code
        self._fail_numbers = set(numbers or ())

    @property
    def requests(self) -> list[SmsSendRequest]:
        with self._lock:
            return self._requests.copy()

    def get_last_request(self) -> SmsSendRequest | None:
        return self._requests[-1] if self._requests else None

    def send_sms_sync(self, request: SmsSendRequest) -> SmsSendResponse:
        logger.info("Mock: Sending SMS", extra={"to": request.to})

        if self._should_fail and (not self._fail_numbers or request.to in self._fail_numbers):
            raise SmsSendError(message=self._fail_error, error_code=self._fail_code)

        with self._lock:
            self._requests.append(request)
            reference = f"MOCK_SMS_{self._next_id:06d}"
            self._next_id += 1

        return SmsSendResponse(
            reference=reference,
            raw_response={"mock": True, "reference": reference, "to": request.to},
        )

    def generate_status_webhook(
        self,
        reference: str,
        code: DizparosStatusCode = DizparosStatusCode.DELIVERED,
        description: str = "Delivered",
        **data: Any,
    ) -> dict[str, Any]:
        """Build a delivery webhook body as Dizparos would post it."""
        return {
            "webhook_event_id": generate_webhook_event_id(),
            "type": int(code),
            "type_description": description,
            "attempts": 1,
            "data": {"reference": reference, **data},
        }
