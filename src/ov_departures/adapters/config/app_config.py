"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OV API configuration
    ovapi_base_url: str = Field(
        default="https://v0.ovapi.nl", description="Base URL of the OV API"
    )
    ovapi_timeout_seconds: float = Field(
        default=10, description="Timeout for departure requests in seconds"
    )
    ovapi_stop_areas_timeout_seconds: float = Field(
        default=30, description="Timeout for the stop area directory request in seconds"
    )
    ovapi_verify_ssl: bool = Field(
        default=False,
        description="Validate the OV API TLS certificate (disabled upstream-wide by default)",
    )
    ovapi_log_requests: bool = Field(
        default=False, description="Log each OV API request and response at INFO level"
    )

    # Cache configuration
    stop_areas_cache_ttl_seconds: int = Field(
        default=24 * 60 * 60, description="Freshness window of the stop area directory"
    )
    departures_cache_ttl_seconds: int = Field(
        default=30, description="Freshness window of per-station departures"
    )
    departures_limit: int = Field(
        default=10, description="Number of departures evaluated per station"
    )

    # Trigger engine configuration
    poll_interval_seconds: int = Field(
        default=30, description="Interval between trigger evaluations in seconds"
    )
    triggered_retention_minutes: int = Field(
        default=60,
        description="Minutes after its planned time before a fired departure is forgotten",
    )

    # Display and runtime configuration
    timezone: str = Field(
        default="Europe/Amsterdam",
        description="Timezone for formatted departure times (IANA timezone name)",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    settings_file: str | None = Field(
        default=".ov_departures_settings.json",
        description="JSON file used as durable settings store (unset for in-memory only)",
    )

    # TOML config file path with [[triggers]] definitions
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file for trigger definitions",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return v.upper()

    @field_validator(
        "poll_interval_seconds",
        "departures_cache_ttl_seconds",
        "stop_areas_cache_ttl_seconds",
        "departures_limit",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate intervals and limits are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file, applying the [engine] section if present."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        engine = toml_data.get("engine", {})
        if isinstance(engine, dict):
            if "poll_interval_seconds" in engine:
                self.poll_interval_seconds = int(engine["poll_interval_seconds"])
            if "triggered_retention_minutes" in engine:
                self.triggered_retention_minutes = int(engine["triggered_retention_minutes"])

        return toml_data

    def get_triggers_config(self) -> list[dict[str, Any]]:
        """Parse and return trigger definitions as a list of dicts from the TOML file.

        Returns an empty list when no config file is set. Entries with placeholder
        station ids (containing "XXX") are skipped.
        """
        toml_data = self._load_toml_data()

        triggers = toml_data.get("triggers", [])
        if not isinstance(triggers, list):
            raise ValueError("TOML config 'triggers' must be a list")
        return [
            t
            for t in triggers
            if isinstance(t, dict) and str(t.get("station_id", "")).find("XXX") == -1
        ]
