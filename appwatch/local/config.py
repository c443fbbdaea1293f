import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import appwatch.settings as default_settings
from appwatch.local.errors import ConfigError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonitorConfig:
    """
    Immutable startup parameters for the supervisor.

    Loaded once from the JSON config file and never mutated afterwards.
    """
    command: str
    check_url: str
    interval_seconds: int = default_settings.DEFAULT_INTERVAL_SECONDS
    log_file: Optional[str] = None
    max_failures_before_restart: int = default_settings.DEFAULT_MAX_FAILURES_BEFORE_RESTART


def resolve_config_path() -> Path:
    """Returns the config file path from the environment, or the default one."""
    return Path(os.getenv(default_settings.CONFIG_PATH_ENV_VAR) or default_settings.DEFAULT_CONFIG_PATH)


def _coerce_positive_int(raw: Dict[str, Any], key: str, default: int) -> int:
    """
    Reads an integer setting, falling back to the default when it is absent or not positive.

    :raises ConfigError: If the value is present but not an integer.
    """
    value = raw.get(key)
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Setting '{key}' must be an integer, got {value!r}.")
    if value <= 0:
        log.debug(f"Setting '{key}' is {value}, using default {default}.")
        return default
    return value


def _require_string(raw: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"Setting '{key}' must be a string, got {value!r}.")
        if value.strip():
            return value
    raise ConfigError(f"Setting '{keys[0]}' is required.")


def parse_config(raw: Any) -> MonitorConfig:
    """
    Builds a MonitorConfig from an already decoded JSON document.

    :param raw: The decoded JSON value; must be an object.
    :return: The validated configuration.
    :raises ConfigError: If required keys are missing or values have the wrong type.
    """
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a JSON object.")

    log_file = raw.get("log_file")
    if log_file is not None and not isinstance(log_file, str):
        raise ConfigError(f"Setting 'log_file' must be a string, got {log_file!r}.")

    return MonitorConfig(
        # 'app_command' is accepted for older config files.
        command=_require_string(raw, "command", "app_command"),
        check_url=_require_string(raw, "check_url"),
        interval_seconds=_coerce_positive_int(
            raw, "interval_seconds", default_settings.DEFAULT_INTERVAL_SECONDS
        ),
        log_file=log_file or None,
        max_failures_before_restart=_coerce_positive_int(
            raw, "max_failures_before_restart", default_settings.DEFAULT_MAX_FAILURES_BEFORE_RESTART
        ),
    )


def load_config(path: Union[str, Path]) -> MonitorConfig:
    """
    Reads and validates the JSON config file.

    :param path: Path to the config file.
    :return: The validated configuration.
    :raises ConfigError: If the file cannot be read or parsed.
    """
    config_path = Path(path)
    try:
        with config_path.open('r', encoding='utf-8') as f:
            raw = json.load(f)
    # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
    except (ValueError, OSError) as e:
        raise ConfigError(f"Cannot load config from '{config_path}': {e}") from e

    return parse_config(raw)
