"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from health_prober.core.exceptions import ConfigurationError

DEFAULT_INTERVAL_SECONDS = 60


class ProberSettings(BaseSettings):
    """Prober module configuration."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_PROBER_PROBER_")

    timeout_ms: int = Field(
        default=5000,
        ge=1,
        le=120000,
        description="Hard deadline for a single probe in milliseconds"
    )

    verify_tls: bool = Field(
        default=False,
        description=(
            "Verify TLS certificate chains for https targets. Disabled by "
            "default so self-signed services still report as reachable."
        )
    )

    user_agent: str = Field(
        default="HealthProber/1.0",
        description="User-Agent header for probe requests"
    )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class ServerSettings(BaseSettings):
    """HTTP surface configuration."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_PROBER_SERVER_")

    host: str = Field(default="127.0.0.1", description="Bind address")

    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")

    route_prefix: str = Field(
        default="",
        description="Prefix for the health-check routes (e.g. /api/apps)"
    )

    @field_validator("route_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value


class IndicatorSettings(BaseSettings):
    """Polling indicator configuration."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_PROBER_INDICATOR_")

    health_check_enabled: bool = Field(
        default=True,
        description="Gate for polling; when off the indicator never calls the network"
    )

    health_check_interval: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seconds between checks; unset or 0 means 60"
    )

    service_url: Optional[str] = Field(
        default=None,
        description="Base URL of a running health-prober service to poll"
    )

    @property
    def interval_seconds(self) -> int:
        return self.health_check_interval or DEFAULT_INTERVAL_SECONDS


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_PROBER_LOGGING_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level"
    )

    json_format: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output"
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Optional file to mirror log output into"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value


class Settings(BaseSettings):
    """Main configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="HEALTH_PROBER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    prober: ProberSettings = Field(default_factory=ProberSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    indicator: IndicatorSettings = Field(default_factory=IndicatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML configuration file."""
        import yaml

        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        return cls(**data)

    @classmethod
    def from_file_or_default(cls, path: Path | None = None) -> "Settings":
        """Load from file if exists, otherwise return defaults."""
        default_paths = [
            Path("health-prober.yaml"),
            Path("health-prober.yml"),
            Path(".health-prober.yaml"),
            Path.home() / ".config" / "health-prober" / "config.yaml",
        ]

        if path and path.exists():
            return cls.from_yaml(path)

        for default_path in default_paths:
            if default_path.exists():
                return cls.from_yaml(default_path)

        return cls()
