"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the project root). Every field has a default, so the service starts
without any environment at all.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.MIN_HISTORY_POINTS)
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root so relative .env paths work from any cwd.
_ROOT_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:             Human-readable API name shown in OpenAPI docs.
        APP_VERSION:           Semantic version string.
        APP_DESCRIPTION:       Short description shown in the OpenAPI UI.
        DEBUG:                 Enable verbose logging.
        LOG_LEVEL:             Root logger level when DEBUG is off.
        MIN_HISTORY_POINTS:    Minimum history length accepted by the engine.
        DEFAULT_HISTORY_DAYS:  Days of history fetched when not specified.
        DEFAULT_FORECAST_DAYS: Horizon used when not specified.
        MAX_FORECAST_DAYS:     Upper bound on the requested horizon.
        FRONTEND_URL:          Optional deployed frontend origin for CORS.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ROOT_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Crypto Forecast API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = (
        "Short-term cryptocurrency price forecasts with confidence bounds "
        "from three heuristic models."
    )

    # ── Logging ───────────────────────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ── Forecasting ───────────────────────────────────────────────────────
    MIN_HISTORY_POINTS: int = Field(default=30, ge=8)
    DEFAULT_HISTORY_DAYS: int = Field(default=90, ge=1)
    DEFAULT_FORECAST_DAYS: int = Field(default=7, ge=0)
    MAX_FORECAST_DAYS: int = Field(default=365, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.
        """
        origins: List[str] = [
            "http://localhost:5173",   # Vite dev server
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` when the debug flag is set, else ``LOG_LEVEL``."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    @model_validator(mode="after")
    def _default_horizon_within_max(self) -> "Settings":
        """Raise if the default horizon exceeds the maximum."""
        if self.DEFAULT_FORECAST_DAYS > self.MAX_FORECAST_DAYS:
            raise ValueError("DEFAULT_FORECAST_DAYS must not exceed MAX_FORECAST_DAYS")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
