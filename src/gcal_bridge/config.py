"""Configuration: XDG-compliant config discovery and settings."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

from gcal_bridge.errors import ConfigError

_PROJECT_CONFIG = "gcal-bridge.toml"
_APP_DIR = "gcal-bridge"
_XDG_CONFIG = "config.toml"

OUTPUT_FORMATS = ("json", "table")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def find_config() -> Path | None:
    """Discover config file.

    Search order (first existing file wins):
    1. $GCB_CONFIG env var (explicit override)
    2. gcal-bridge.toml, walking up from CWD (project-local config)
    3. $XDG_CONFIG_HOME/gcal-bridge/config.toml (default ~/.config/)
    """
    env_path = os.environ.get("GCB_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.is_file():
            raise ConfigError(
                f"GCB_CONFIG points to missing file: {env_path}",
                suggestions=["Check the path or unset GCB_CONFIG to use auto-discovery"],
            )
        return p

    cwd = Path.cwd()
    for d in [cwd, *cwd.parents]:
        candidate = d / _PROJECT_CONFIG
        if candidate.is_file():
            return candidate

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        xdg_path = Path(xdg_home) / _APP_DIR / _XDG_CONFIG
    else:
        xdg_path = Path.home() / ".config" / _APP_DIR / _XDG_CONFIG
    if xdg_path.is_file():
        return xdg_path

    return None


def load_config_toml(path: Path | None = None) -> dict[str, object]:
    """Load and return raw TOML config dict. Empty dict if no file."""
    if path is None:
        path = find_config()
    if path is None:
        return {}
    try:
        with open(path, "rb") as f:
            result: dict[str, object] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return result


@dataclass
class Settings:
    """Mapping and CLI configuration.

    conference_data_version is sent with every event body that carries
    conferenceData. Google only reads conferenceData at version 1; at 0 the
    conference is still written to the body but Google drops it.
    """

    account_id: str = "default"
    conference_data_version: int = 1
    output_format: str = "json"
    log_level: str = "WARNING"


def _setting(raw: dict[str, object], key: str, default: object) -> str:
    """Env var GCB_<KEY> beats the TOML value, which beats the default."""
    env = os.environ.get(f"GCB_{key.upper()}")
    if env:
        return env
    return str(raw.get(key, default))


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from config TOML and/or env vars."""
    raw = load_config_toml(path)
    defaults = Settings()

    version_str = _setting(raw, "conference_data_version", defaults.conference_data_version)
    try:
        conference_data_version = int(version_str)
    except ValueError as e:
        raise ConfigError(f"conference_data_version must be an integer, got {version_str!r}") from e
    if conference_data_version not in (0, 1):
        raise ConfigError(f"conference_data_version must be 0 or 1, got {conference_data_version}")

    output_format = _setting(raw, "output_format", defaults.output_format)
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}")

    log_level = _setting(raw, "log_level", defaults.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        account_id=_setting(raw, "account_id", defaults.account_id),
        conference_data_version=conference_data_version,
        output_format=output_format,
        log_level=log_level,
    )
