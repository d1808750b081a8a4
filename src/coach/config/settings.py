"""Application settings and configuration."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BELVO_SANDBOX_URL = "https://sandbox.belvo.com"
BELVO_PRODUCTION_URL = "https://api.belvo.com"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "AI Financial Coach"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Banking data provider
    banking_provider: Literal["belvo", "stub"] = "belvo"
    belvo_environment: Literal["sandbox", "production"] = "sandbox"
    belvo_base_url: Optional[str] = None

    # Server-side credentials, only used when a caller supplies none
    belvo_secret_id: Optional[str] = None
    belvo_secret_key: Optional[str] = None

    # Aggregation behavior
    request_timeout_seconds: float = 30.0
    fan_out_timeout_seconds: float = 45.0
    transaction_lookback_months: int = 3

    # Context cache
    context_cache_ttl_seconds: int = 24 * 60 * 60

    default_currency: str = "BRL"
    owner_placeholder: str = "Unknown Customer"

    def has_default_credentials(self) -> bool:
        """Check whether server-side provider credentials are configured."""
        return bool(self.belvo_secret_id and self.belvo_secret_key)


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
