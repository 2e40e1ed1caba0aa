"""Configuration for regform.

Settings are resolved in order: explicit overrides, environment variables,
the global config file, then built-in defaults.

Config file: ``$REGFORM_HOME/config.yaml`` (default ``~/.config/regform``)::

    endpoint: https://webapis.bloomtechdev.com/registration
    timeout: 10
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

DEFAULT_ENDPOINT = "https://webapis.bloomtechdev.com/registration"
DEFAULT_TIMEOUT = 10.0

ENV_HOME = "REGFORM_HOME"
ENV_ENDPOINT = "REGFORM_ENDPOINT"
ENV_TIMEOUT = "REGFORM_TIMEOUT"


class ConfigError(ValueError):
    """Raised when the config file or environment holds invalid settings."""

    pass


class Settings(BaseModel):
    """Resolved client settings."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    config_path: Path | None = None


def get_regform_home() -> Path:
    """Directory holding the global config file."""
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "regform"


def get_config_path() -> Path:
    return get_regform_home() / "config.yaml"


def load_global_config(path: Path | None = None) -> dict[str, Any]:
    """Load the global config file.

    Args:
        path: Config file to read (default: ``get_config_path()``).

    Returns:
        The parsed mapping, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    path = path or get_config_path()
    if not path.exists():
        return {}

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    endpoint: str | None = None,
    timeout: float | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Resolve settings from overrides, environment and config file.

    Args:
        endpoint: Endpoint override (e.g. from the CLI).
        timeout: Timeout override in seconds.
        config_path: Config file to read instead of the default.

    Returns:
        Resolved Settings.

    Raises:
        ConfigError: If any source holds an invalid value.
    """
    path = config_path or get_config_path()
    data = load_global_config(path)

    resolved: dict[str, Any] = {"config_path": path if path.exists() else None}

    for key, env_var, override in (
        ("endpoint", ENV_ENDPOINT, endpoint),
        ("timeout", ENV_TIMEOUT, timeout),
    ):
        if override is not None:
            resolved[key] = override
        elif os.environ.get(env_var):
            resolved[key] = os.environ[env_var]
        elif data.get(key) is not None:
            resolved[key] = data[key]

    try:
        return Settings(**resolved)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
