"""Core exceptions shared by the faultline engine."""

from .exceptions import (
    ConfigurationError,
    FaultlineError,
    FaultlineUsageError,
    MismatchError,
    ResultError,
    StructuralMisuseError,
)

__all__ = [
    "ConfigurationError",
    "FaultlineError",
    "FaultlineUsageError",
    "MismatchError",
    "ResultError",
    "StructuralMisuseError",
]
