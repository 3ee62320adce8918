"""
SMS provider interface definition.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

import anyio


@dataclass(frozen=True)
class SmsSendRequest:
    """One outbound text message."""

    to: str
    message: str
    lead_id: UUID | None = None


@dataclass(frozen=True)
class SmsSendResponse:
    """Provider acknowledgement of an accepted message."""

    reference: str | None
    raw_response: dict[str, Any] = field(default_factory=dict)


class SmsProviderError(Exception):
    """Base exception for SMS provider errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        provider_response: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.provider_response = provider_response or {}


class SmsSendError(SmsProviderError):
    """Provider refused or never received the message."""


class SmsProvider(ABC):
    """Abstract interface for SMS providers.

    Adapters implement the blocking ``send_sms_sync``; ``send_sms`` runs it
    in a worker thread so the event loop is never blocked on the provider.
    """

    async def send_sms(self, request: SmsSendRequest) -> SmsSendResponse:
        """Send one message (async)."""
        return await anyio.to_thread.run_sync(self.send_sms_sync, request)

    @abstractmethod
    def send_sms_sync(self, request: SmsSendRequest) -> SmsSendResponse:
        """Send one message.

        Raises:
            SmsSendError: The provider did not accept the message.
        """
        ...

    def close(self) -> None:
        """Release provider resources."""
