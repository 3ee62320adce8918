"""
Webhook request guards.
"""

import hmac
from typing import Annotated

from fastapi import Header

from smsdash.config import get_settings
from smsdash.shared.exceptions import AuthenticationError


async def verify_webhook_token(
    x_webhook_token: Annotated[str | None, Header()] = None,
) -> None:
    """Check the shared secret header when WEBHOOK_TOKEN is configured."""
    expected = get_settings().webhook_token
    if not expected:
        return
    if not x_webhook_token or not hmac.compare_digest(x_webhook_token, expected):
        raise AuthenticationError("Invalid webhook token")
