"""
Engine configuration definitions.

Purpose:
    Provide a strongly typed configuration object for the faultline engine so
    loaders, dispatchers and the diagnostic dump depend on validated settings
    instead of loose dictionaries.
External Dependencies:
    PyYAML for reading YAML configuration files. JSON files are parsed with the
    standard library.
Fallback Semantics:
    When no explicit configuration is installed, `get_config()` builds one from
    the defaults overlaid with `FAULTLINE_*` environment variables.
Timeout Strategy:
    Configuration loading performs a single local file read; no timeout
    management is required in this module.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from faultline.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FAULTLINE_"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class FaultlineConfig:
    """Immutable configuration values for the faultline engine.

    Summary:
        Encapsulates the tunable parameters that govern structural checks and
        diagnostic rendering.
    Parameters:
        debug_checks (bool): When enabled, loader misuse (out-of-order exit or
            exit from a foreign execution context) raises
            ``StructuralMisuseError`` instead of being logged.
        diagnostic_value_max_length (int): Upper bound on the number of
            characters rendered per payload in a diagnostic dump.
        log_level (str): Level applied to the ``faultline`` logger by the CLI.
    Raises:
        ValueError: When supplied values are inconsistent.
    Side Effects:
        None. Instances are pure data objects.
    """

    debug_checks: bool = False
    diagnostic_value_max_length: int = 200
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate core invariants for the configuration payload.

        Raises:
            ValueError: If the length budget is non-positive or the log level
                is unknown.
        """
        if self.diagnostic_value_max_length <= 0:
            raise ValueError("diagnostic_value_max_length must be a positive integer")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}")
        object.__setattr__(self, "log_level", self.log_level.upper())

    def merged(self, overrides: Mapping[str, Any]) -> "FaultlineConfig":
        """Return a copy with known keys from ``overrides`` applied."""

        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", sorted(unknown))
        return replace(self, **{k: v for k, v in overrides.items() if k in known})


def _parse_bool(raw: str, name: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {name} is not a boolean: {raw!r}")


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    name = f"{ENV_PREFIX}DEBUG_CHECKS"
    if name in environ:
        overrides["debug_checks"] = _parse_bool(environ[name], name)

    name = f"{ENV_PREFIX}DIAGNOSTIC_MAX_LENGTH"
    if name in environ:
        try:
            overrides["diagnostic_value_max_length"] = int(environ[name])
        except ValueError as e:
            raise ConfigurationError(f"Environment variable {name} is not an integer: {environ[name]!r}") from e

    name = f"{ENV_PREFIX}LOG_LEVEL"
    if name in environ:
        overrides["log_level"] = environ[name]

    return overrides


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported configuration format: {path.suffix}", path=str(path))
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to parse configuration file: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration root must be a mapping", path=str(path))

    # Accept both a flat mapping and one nested under a "faultline" key.
    section = data.get("faultline", data)
    if not isinstance(section, dict):
        raise ConfigurationError("The 'faultline' section must be a mapping", path=str(path))
    return section


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> FaultlineConfig:
    """Build a configuration from defaults, an optional file and the environment.

    Args:
        path: Optional YAML or JSON file. Values may sit at the root or under a
            ``faultline`` key.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        FaultlineConfig: The validated configuration.

    Raises:
        ConfigurationError: If the file is missing, malformed or yields invalid
            values.
    """

    environ = os.environ if environ is None else environ
    config = FaultlineConfig()

    try:
        if path is not None:
            config = config.merged(_read_config_file(Path(path)))
            logger.debug("Loaded configuration from %s", path)
        config = config.merged(_env_overrides(environ))
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}", path=str(path) if path else None) from e

    return config


_config_lock = threading.Lock()
_active_config: Optional[FaultlineConfig] = None


def get_config() -> FaultlineConfig:
    """Return the process-wide configuration, loading it from the environment on first use."""

    global _active_config
    with _config_lock:
        if _active_config is None:
            _active_config = load_config()
        return _active_config


def set_config(config: Optional[FaultlineConfig]) -> None:
    """Install ``config`` as the process-wide configuration.

    Passing ``None`` drops the installed configuration so the next
    ``get_config()`` call reloads it from the environment.
    """

    global _active_config
    with _config_lock:
        _active_config = config


__all__ = [
    "ENV_PREFIX",
    "FaultlineConfig",
    "get_config",
    "load_config",
    "set_config",
]
