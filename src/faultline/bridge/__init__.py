"""Bridging between raised failures and failure-carrying return values."""

from .episode_bridge import exception_to_result, try_handle_some
from .result import Result

__all__ = ["Result", "exception_to_result", "try_handle_some"]
