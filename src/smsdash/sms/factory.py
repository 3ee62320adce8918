"""
SMS provider factory.

Configuration comes from SmsConfig (pydantic-settings, OS env + .env); never
read raw os.getenv("SMS_*") here.
"""

from functools import lru_cache

from smsdash.shared.logging import get_logger
from smsdash.sms.adapters.dizparos import DizparosAdapter
from smsdash.sms.adapters.mock import MockSmsProvider
from smsdash.sms.config import ProviderType, SmsConfig
from smsdash.sms.config import get_sms_config as _load_sms_config
from smsdash.sms.interface import SmsProvider

logger = get_logger(__name__)


def _mask(s: str, keep: int = 6) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return f"{s[:keep]}***"


@lru_cache(maxsize=1)
def get_sms_config() -> SmsConfig:
    """Return the cached SmsConfig."""
    return _load_sms_config()


def create_sms_provider(cfg: SmsConfig) -> SmsProvider:
    if cfg.provider_type == ProviderType.DIZPAROS:
        return DizparosAdapter(cfg)

    if cfg.provider_type == ProviderType.MOCK:
        return MockSmsProvider()

    raise ValueError(f"Unsupported SMS provider_type: {cfg.provider_type}")


@lru_cache(maxsize=1)
def get_sms_provider() -> SmsProvider:
    """Create and cache the SMS provider selected by SmsConfig."""
    cfg = get_sms_config()

    logger.info(
        "SMS config resolved",
        extra={
            "provider_type": cfg.provider_type.value,
            "dizparos_api_url": cfg.dizparos_api_url,
            "dizparos_api_token": _mask(cfg.dizparos_api_token),
            "max_concurrent_sends": cfg.max_concurrent_sends,
        },
    )
    if cfg.provider_type == ProviderType.DIZPAROS and not cfg.dizparos_api_token:
        logger.warning("SMS_DIZPAROS_API_TOKEN not set - SMS will not be sent")

    return create_sms_provider(cfg)
