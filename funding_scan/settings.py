"""Environment-backed settings for funding scan."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from funding_scan.rates import AprMode


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    assets: str | None = Field(default=None, alias="FUNDING_SCAN_ASSETS")
    exchanges: str | None = Field(default=None, alias="FUNDING_SCAN_EXCHANGES")
    apr_mode: AprMode = Field(default="simple", alias="FUNDING_SCAN_APR_MODE")
    request_timeout: float = Field(default=10.0, gt=0, alias="FUNDING_SCAN_REQUEST_TIMEOUT")
    venue_timeout: float = Field(default=25.0, gt=0, alias="FUNDING_SCAN_VENUE_TIMEOUT")
    poll_interval: int = Field(default=30, ge=5, le=3600, alias="FUNDING_SCAN_POLL_INTERVAL")
    costs_file: str | None = Field(default=None, alias="FUNDING_SCAN_COSTS_FILE")
    log_level: str = Field(default="INFO", alias="FUNDING_SCAN_LOG_LEVEL")
    debug_exchanges: str | None = Field(default=None, alias="DEBUG_EXCHANGES")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()
