"""
Configuration for the MRZ engine.

Settings come from defaults, an optional YAML file and ``MRZ_*`` environment
variables, in increasing order of precedence.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mrz_engine.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "MRZ_"


class MRZEngineSettings(BaseModel):
    """Settings shared by the library entry point and the CLI."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Service identification
    service_name: str = Field(default="mrz-engine", description="Name used in log records")
    environment: str = Field(
        default="development", description="Environment (development, testing, staging, production)"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level, or OFF")
    log_format: str = Field(default="text", description="Log format (json, text)")

    # Parsing configuration
    expiry_window_years: int = Field(
        default=50,
        ge=1,
        le=99,
        description="Years around the reference date an expiry year may resolve to",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        valid_environments = {"development", "testing", "staging", "production"}
        if v not in valid_environments:
            msg = f"Environment must be one of {valid_environments}"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level setting."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "OFF"}
        if v.upper() not in valid_levels:
            msg = f"Log level must be one of {valid_levels}"
            raise ValueError(msg)
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in {"json", "text"}:
            msg = "Log format must be 'json' or 'text'"
            raise ValueError(msg)
        return v.lower()

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> MRZEngineSettings:
        """
        Build settings from a plain mapping.

        Raises:
            ConfigurationError: If a value is invalid or a key is unknown
        """
        try:
            return cls(**values)
        except ValidationError as e:
            msg = f"Invalid MRZ engine settings: {e}"
            raise ConfigurationError(msg) from e

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: dict[str, str] | None = None) -> MRZEngineSettings:
        """Build settings from environment variables such as ``MRZ_LOG_LEVEL``."""
        return cls.from_mapping(_env_values(prefix, os.environ if environ is None else environ))

    @classmethod
    def from_yaml(cls, path: str | Path) -> MRZEngineSettings:
        """Build settings from a YAML file."""
        return cls.from_mapping(_load_yaml(Path(path)))

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        prefix: str = ENV_PREFIX,
        environ: dict[str, str] | None = None,
    ) -> MRZEngineSettings:
        """
        Merge an optional YAML file with environment overrides.

        Args:
            path: YAML settings file; skipped when None
            prefix: Environment variable prefix
            environ: Environment mapping, defaults to ``os.environ``

        Returns:
            The merged settings
        """
        values: dict[str, Any] = {}
        if path is not None:
            values.update(_load_yaml(Path(path)))
        values.update(_env_values(prefix, os.environ if environ is None else environ))
        return cls.from_mapping(values)


def _env_values(prefix: str, environ: dict[str, str]) -> dict[str, str]:
    field_names = MRZEngineSettings.model_fields
    values = {}
    for key, value in environ.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix) :].lower()
        if name in field_names:
            values[name] = value
    return values


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        msg = f"Settings file not found: {path}"
        raise ConfigurationError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Error parsing settings file {path}: {e}"
        raise ConfigurationError(msg) from e

    if not isinstance(data, dict):
        msg = f"Settings file {path} must contain a mapping"
        raise ConfigurationError(msg)
    logger.debug("Loaded settings from %s", path)
    return data


DEFAULT_SETTINGS = MRZEngineSettings()
