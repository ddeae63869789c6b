# src/config/settings.py - v1
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Every variable is prefixed with ``TREECOPY_`` (e.g. ``TREECOPY_WORKERS=8``).
Settings are passed explicitly into the engine; nothing reads them globally.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from treecopy.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="TREECOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Engine ===
    workers: int = 4
    copy_buffer_size: int = 32 * 1024
    submit_backoff_seconds: float = 1.0

    # === Progress ===
    progress_enabled: bool = True
    progress_min_interval: float = 0.1

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("workers must be > 0")
        return v

    @field_validator("submit_backoff_seconds", "progress_min_interval")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("interval settings must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field rules that a single field validator cannot express."""
        errors: list[str] = []

        if self.copy_buffer_size < 1024:
            errors.append("COPY_BUFFER_SIZE must be at least 1024 bytes")

        try:
            parse_size(self.log_rotation)
        except ValueError as exc:
            errors.append(f"LOG_ROTATION: {exc}")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment/.env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
