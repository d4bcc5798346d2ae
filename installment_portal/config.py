"""Configuration management using Pydantic Settings"""

from typing import Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_STORE_URL = "https://placeholder.supabase.co"
PLACEHOLDER_STORE_KEY = "placeholder"


def is_valid_url(url: Optional[str]) -> bool:
    """True for absolute http(s) URLs with a host"""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Hosted store (PostgREST endpoint + anon key)
    supabase_url: str = Field(default="", validate_default=True)
    supabase_anon_key: str = Field(default="", validate_default=True)

    # Optional direct read-only database connection; takes precedence over REST
    database_url: Optional[str] = None

    # Service
    service_name: str = "installment-portal"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0

    # Business constants of the hosted schema
    installment_transaction_type: str = "CICILAN"
    item_note_prefix: str = "Cicilan: "
    min_suffix_digits: int = 4
    max_suffix_digits: int = 6

    @field_validator("supabase_url", mode="before")
    @classmethod
    def _fallback_store_url(cls, value: Optional[str]) -> str:
        # Queries against the placeholder fail at call time, not at startup
        if isinstance(value, str):
            value = value.strip()
        return value if is_valid_url(value) else PLACEHOLDER_STORE_URL

    @field_validator("supabase_anon_key", mode="before")
    @classmethod
    def _fallback_store_key(cls, value: Optional[str]) -> str:
        return value or PLACEHOLDER_STORE_KEY

    @property
    def uses_placeholder_store(self) -> bool:
        return self.database_url is None and self.supabase_url == PLACEHOLDER_STORE_URL


settings = Settings()
