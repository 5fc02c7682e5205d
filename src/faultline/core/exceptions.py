"""
Core exceptions for faultline.

This module defines the exception classes raised by the engine itself. They
describe misuse of the engine or a failed post-hoc retrieval; they never stand
in for the user failures that flow through dispatch.

The exceptions are organized into categories:
- Retrieval Exceptions
- Structural Exceptions
- Configuration Exceptions
- Result Exceptions

Each exception carries a message, an error code and a context dictionary to
aid in troubleshooting.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class FaultlineError(Exception):
    """Base exception class for all faultline engine errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize a faultline error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

        logger.debug("FaultlineError: %s", message, extra={
            "error_code": error_code,
            "context": context
        })


# Retrieval Exceptions

class MismatchError(FaultlineError):
    """Raised by ``unwrap`` when no retrieval attempt found its payloads."""

    def __init__(self, attempted: Optional[list] = None, message: Optional[str] = None):
        """
        Initialize a mismatch error.

        Args:
            attempted: Payload type names of each attempt that was tried
            message: Optional custom message
        """
        self.attempted = attempted or []
        default_message = "No combination of payloads matched"
        if self.attempted:
            default_message += f" (attempted: {self.attempted})"
        super().__init__(
            message or default_message,
            error_code="NO_MATCH",
            context={"attempted": self.attempted}
        )


# Structural Exceptions

class StructuralMisuseError(FaultlineError):
    """Raised when loaders are exited out of order or across contexts."""

    def __init__(self, message: str, loader: Optional[str] = None):
        """
        Initialize a structural misuse error.

        Args:
            message: Description of the violated precondition
            loader: Representation of the offending loader
        """
        self.loader = loader
        super().__init__(
            message,
            error_code="STRUCTURAL_MISUSE",
            context={"loader": loader}
        )


class FaultlineUsageError(FaultlineError):
    """Raised when a handler or attempt declaration is malformed."""

    def __init__(self, message: str):
        super().__init__(message, error_code="USAGE")


# Configuration Exceptions

class ConfigurationError(FaultlineError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        """
        Initialize a configuration error.

        Args:
            message: Description of the configuration problem
            path: Path of the offending configuration file, if any
        """
        self.path = path
        super().__init__(
            message,
            error_code="CONFIGURATION",
            context={"path": path}
        )


# Result Exceptions

class ResultError(FaultlineError):
    """Raised when the value of a failed ``Result`` is requested."""

    def __init__(self, error_id: int, category: Optional[BaseException] = None):
        """
        Initialize a result error.

        Args:
            error_id: Episode id carried by the failed result
            category: Optional category exception carried by the result
        """
        self.error_id = error_id
        self.category = category
        message = f"Result holds failure of episode {error_id}"
        if category is not None:
            message += f" ({type(category).__name__}: {category})"
        super().__init__(
            message,
            error_code="RESULT_FAILURE",
            context={"error_id": error_id}
        )
