"""Runtime settings for the 60fps.design scraper (pydantic-settings)."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOGGER = logging.getLogger(__name__)

TARGET_URL = "https://60fps.design"

UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Reduced budget for environments with a hard wall-clock limit.
SERVERLESS_OVERRIDES: dict[str, int] = {
    "navigation_timeout_ms": 30_000,
    "settle_ms": 8_000,
    "click_settle_ms": 2_000,
    "max_load_attempts": 5,
    "ancestor_depth": 6,
}


class ConfigError(RuntimeError):
    """Raised when configuration cannot be loaded safely."""


def parse_limit(value: Any) -> int | None:
    """Return a positive integer limit, or None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return max(1, math.floor(number))


class ScraperSettings(BaseSettings):
    """Strongly typed scraper configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        validate_default=True,
    )

    target_url: str = Field(default=TARGET_URL, validation_alias=AliasChoices("SCRAPER_TARGET_URL", "TARGET_URL"))
    user_agent: str = Field(default=UA, validation_alias="SCRAPER_USER_AGENT")
    headless: bool = Field(default=True, validation_alias="SCRAPER_HEADLESS")

    # Timing
    navigation_timeout_ms: int = Field(60_000, ge=1, validation_alias="SCRAPER_NAV_TIMEOUT_MS")
    settle_ms: int = Field(10_000, ge=0, validation_alias="SCRAPER_SETTLE_MS")
    click_settle_ms: int = Field(3_000, ge=0, validation_alias="SCRAPER_CLICK_SETTLE_MS")

    # Bounds
    max_load_attempts: int = Field(20, ge=1, validation_alias="SCRAPER_MAX_LOAD_ATTEMPTS")
    ancestor_depth: int = Field(8, ge=1, validation_alias="SCRAPER_ANCESTOR_DEPTH")

    use_fallback: bool = Field(default=True, validation_alias="SCRAPER_USE_FALLBACK")
    limit: int | None = Field(default=None, validation_alias=AliasChoices("LIMIT", "SCRAPER_LIMIT"))
    log_level: str = Field(default="INFO", validation_alias="SCRAPER_LOG_LEVEL")

    @field_validator("limit", mode="before")
    @classmethod
    def _lenient_limit(cls, value: Any) -> int | None:
        return parse_limit(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def serverless(self) -> "ScraperSettings":
        """Copy of these settings with the reduced serverless budget."""
        return self.model_copy(update=SERVERLESS_OVERRIDES)


def load_settings(env_path: Path | None = None, **overrides: Any) -> ScraperSettings:
    """Load settings from .env/environment, applying explicit overrides last."""
    load_kwargs: dict[str, Any] = {}
    if env_path is not None:
        load_dotenv(env_path, override=False)
        load_kwargs["_env_file"] = str(env_path)
    else:
        load_dotenv(override=False)
    load_kwargs.update({k: v for k, v in overrides.items() if v is not None})
    try:
        settings = ScraperSettings(**load_kwargs)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    LOGGER.debug(
        "Settings loaded: target=%s max_load_attempts=%d ancestor_depth=%d",
        settings.target_url,
        settings.max_load_attempts,
        settings.ancestor_depth,
    )
    return settings
