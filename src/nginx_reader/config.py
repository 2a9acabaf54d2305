"""Settings management for nginx-reader.

Settings live in a YAML file. The location is taken from the ``--settings``
CLI option, then the ``NGINX_READER_CONFIG`` environment variable, then
``~/.nginx-reader/settings.yaml``.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from nginx_reader.errors import SettingsError

ENV_VAR = "NGINX_READER_CONFIG"
DEFAULT_SETTINGS_FILE = Path.home() / ".nginx-reader" / "settings.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReaderSettings(BaseModel):
    """Tunables for reading configuration files."""

    max_include_depth: int = Field(32, ge=1, description="Maximum nesting of include directives")
    encoding: str = Field("utf-8", description="Encoding of configuration files")
    log_level: str = Field("WARNING", description="Log level used by the CLI")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


def load_settings(path: str | Path | None = None) -> ReaderSettings:
    """Load settings from a YAML file.

    Args:
        path: Explicit settings file. Must exist when given.

    Returns:
        Parsed settings; defaults when no file is given and the default
        file does not exist.
    """
    explicit = path is not None
    if path is None:
        env_path = os.getenv(ENV_VAR)
        if env_path:
            path, explicit = env_path, True
        else:
            path = DEFAULT_SETTINGS_FILE

    settings_file = Path(path).expanduser()
    if not settings_file.exists():
        if explicit:
            raise SettingsError(f"Settings file {settings_file} does not exist")
        return ReaderSettings()

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Can't read settings file {settings_file}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {settings_file} must contain a mapping")

    try:
        return ReaderSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_file}: {e}") from e
