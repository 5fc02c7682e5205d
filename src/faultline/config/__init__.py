"""Configuration for the faultline engine."""

from .settings import ENV_PREFIX, FaultlineConfig, get_config, load_config, set_config

__all__ = [
    "ENV_PREFIX",
    "FaultlineConfig",
    "get_config",
    "load_config",
    "set_config",
]
