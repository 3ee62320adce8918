"""
SMS provider configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderType(str, Enum):
    """Supported SMS provider types."""

    DIZPAROS = "dizparos"
    MOCK = "mock"


class SmsConfig(BaseSettings):
    """SMS provider configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider selection
    provider_type: ProviderType = Field(default=ProviderType.DIZPAROS)

    # Dizparos
    dizparos_api_url: str = Field(default="https://api.dizparos.com/v1")
    dizparos_api_token: str = Field(default="")

    # Concurrency / timeouts
    max_concurrent_sends: int = Field(default=10, ge=1, le=100)
    timeout_seconds: float = Field(default=30.0, gt=0, le=300)


def get_sms_config() -> SmsConfig:
    return SmsConfig()
