"""
Dizparos SMS provider adapter.
"""

from typing import Any

import httpx

from smsdash.shared.logging import get_logger
from smsdash.sms.config import SmsConfig, get_sms_config
from smsdash.sms.interface import SmsProvider, SmsSendError, SmsSendRequest, SmsSendResponse

logger = get_logger(__name__)


def _extract_reference(data: dict[str, Any]) -> str | None:
    """Provider message id; Dizparos has returned it under several keys."""
    nested = data.get("data")
    reference = (
        data.get("reference")
        or data.get("id")
        or (nested.get("reference") if isinstance(nested, dict) else None)
    )
    return str(reference) if reference else None


class DizparosAdapter(SmsProvider):
    """Dizparos REST adapter.

    Uses a synchronous httpx client; pass one in to stub the transport.
    """

    def __init__(
        self,
        config: SmsConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or get_sms_config()
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=httpx.Timeout(self._config.timeout_seconds))
        return self._http_client

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def _get_api_url(self, endpoint: str) -> str:
        return f"{self._config.dizparos_api_url.rstrip('/')}{endpoint}"

    def send_sms_sync(self, request: SmsSendRequest) -> SmsSendResponse:
        """Send one SMS through ``POST /messaging/send``."""
        if not self._config.dizparos_api_token:
            logger.error("Dizparos API token not configured")
            raise SmsSendError(message="API token not configured", error_code="NOT_CONFIGURED")

        payload = {
            "channel": "sms",
            "details": [{"to": request.to, "message": request.message}],
        }
        headers = {
            "Authorization": f"Bearer {self._config.dizparos_api_token}",
            "Content-Type": "application/json",
        }

        logger.info(
            "Sending SMS via Dizparos",
            extra={"to": request.to, "lead_id": str(request.lead_id) if request.lead_id else None},
        )

        try:
            response = self._get_client().post(
                self._get_api_url("/messaging/send"),
                json=payload,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.exception("HTTP error during Dizparos send", extra={"to": request.to})
            raise SmsSendError(message=f"HTTP error: {e!s}", error_code="HTTP_ERROR") from e

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {"raw": response.text}
        if not isinstance(data, dict):
            data = {"data": data}

        if response.status_code >= 400:
            logger.error(
                "Dizparos send failed",
                extra={"status_code": response.status_code, "error": data, "to": request.to},
            )
            raise SmsSendError(
                message=str(data.get("error") or "Failed to send SMS"),
                error_code=str(response.status_code),
                provider_response=data,
            )

        return SmsSendResponse(reference=_extract_reference(data), raw_response=data)
