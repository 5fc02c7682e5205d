"""Handler selection for failures at a dispatch site."""

from .dispatcher import HandlerDispatcher, dispatch, end_consumed_episode, try_catch
from .failure_context import FailureContext
from .handler import Handler, handler
from .requirements import (
    NOT_SATISFIED,
    Catch,
    Match,
    Require,
    Requirement,
    as_requirement,
    catch,
    match,
)

__all__ = [
    "NOT_SATISFIED",
    "Catch",
    "FailureContext",
    "Handler",
    "HandlerDispatcher",
    "Match",
    "Require",
    "Requirement",
    "as_requirement",
    "catch",
    "dispatch",
    "end_consumed_episode",
    "handler",
    "match",
    "try_catch",
]
