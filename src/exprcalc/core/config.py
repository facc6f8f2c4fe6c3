"""
Configuration for the exprcalc command line.

Settings come from an optional ``exprcalc.toml`` in the working directory,
then from environment variables, then from command-line flags:

    [output]
    precision = 4        # fixed decimals; omit for shortest repr

    [logging]
    level = "WARNING"    # DEBUG, INFO, WARNING, ERROR, CRITICAL

Environment overrides:
    EXPRCALC_PRECISION
    EXPRCALC_LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from exprcalc.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "exprcalc.toml"
PRECISION_ENV_VAR = "EXPRCALC_PRECISION"
LOG_LEVEL_ENV_VAR = "EXPRCALC_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CalcConfig:
    """Output and logging settings."""

    precision: int | None = None  # None = shortest round-trip repr
    log_level: str = _DEFAULT_LOG_LEVEL


def load_config(path: Path | None = None) -> CalcConfig:
    """Load configuration from TOML and the environment.

    Args:
        path: Config file to read. Defaults to ``exprcalc.toml`` in the
            current directory; a missing default file is not an error.

    Returns:
        CalcConfig with file values overridden by environment variables.

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable,
            not valid TOML, or has a non-table [output] or [logging] entry.
    """
    data = _read_toml(path)

    output = _table(data, "output")
    logging_data = _table(data, "logging")

    precision = _parse_precision(output.get("precision"), f"{CONFIG_FILENAME} [output]")
    log_level = _parse_log_level(logging_data.get("level"), f"{CONFIG_FILENAME} [logging]")

    env_precision = os.environ.get(PRECISION_ENV_VAR, "").strip()
    if env_precision:
        precision = _parse_precision(env_precision, PRECISION_ENV_VAR, fallback=precision)

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if env_level:
        log_level = _parse_log_level(env_level, LOG_LEVEL_ENV_VAR, fallback=log_level)

    return CalcConfig(precision=precision, log_level=log_level)


def _read_toml(path: Path | None) -> dict[str, Any]:
    explicit = path is not None
    config_path = path if path is not None else Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return {}

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(
            f"[{key}] in {CONFIG_FILENAME} must be a table, got {type(value).__name__}"
        )
    return value


def _parse_precision(value: Any, source: str, fallback: int | None = None) -> int | None:
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool):
        precision = value
    elif isinstance(value, str):
        try:
            precision = int(value)
        except ValueError:
            precision = -1
    else:
        precision = -1
    if precision < 0:
        logger.warning(
            "Invalid precision %r from %s. Expected a non-negative integer. Ignoring.",
            value,
            source,
        )
        return fallback
    return precision


def _parse_log_level(value: Any, source: str, fallback: str = _DEFAULT_LOG_LEVEL) -> str:
    if value is None:
        return fallback
    level = str(value).upper().strip()
    if level not in _LOG_LEVELS:
        logger.warning(
            "Unknown log level '%s' from %s. Valid values: %s. Using %s.",
            value,
            source,
            ", ".join(_LOG_LEVELS),
            fallback,
        )
        return fallback
    return level
