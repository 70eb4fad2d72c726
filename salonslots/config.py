"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

SUPABASE_KEY_ENV = "SALONSLOTS_SUPABASE_KEY"


class DefaultsConfig(BaseModel):
    """Default settings for availability lookups."""
    service_duration_minutes: int = 60
    mock_data_file: Optional[Path] = None

    @field_validator("service_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("service_duration_minutes must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    supabase_url: str = ""
    supabase_key: str = ""
    salon_id: str
    timezone: str = "America/New_York"
    log_level: str = "WARNING"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def fill_key_from_environment(self) -> "AppConfig":
        """Fall back to the environment for the API key."""
        if not self.supabase_key:
            self.supabase_key = os.environ.get(SUPABASE_KEY_ENV, "")
        return self

    def has_remote_backend(self) -> bool:
        """Check whether enough settings are present to talk to Supabase."""
        return bool(self.supabase_url and self.supabase_key)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read salon settings from a YAML file.

        A missing file raises FileNotFoundError; unreadable YAML or a
        non-mapping document raises ValueError. Field problems surface as
        pydantic's ValidationError.
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path} "
                f"(copy config.example.yaml to get started)"
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Return ``config.yaml`` from the working directory, else from the project root."""
    candidates = [Path.cwd() / "config.yaml", Path(__file__).parent.parent / "config.yaml"]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[-1]
