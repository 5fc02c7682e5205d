"""Bridge between raised failures and failure-carrying return values.

Both styles drive the same episode lifecycle: a failed :class:`Result` names
its episode through its :class:`~faultline.episodes.ErrorId`, a raised
exception through its tag. Handlers are selected with the same rules either
way.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from faultline.core.exceptions import FaultlineUsageError
from faultline.dispatch import FailureContext, HandlerDispatcher, end_consumed_episode
from faultline.episodes import (
    ErrorId,
    PayloadStore,
    episode_for_dispatch,
    episode_for_failure,
    get_registry,
)

from .result import Result

logger = logging.getLogger(__name__)


def try_handle_some(compute: Callable[[], Result], *handlers: Any) -> Result:
    """Run a value-style computation and handle its failure if a handler matches.

    ``compute`` returns a :class:`Result`. A failed result is matched against
    ``handlers`` with its optional category exception as the failure category;
    the selected handler's return value is wrapped in ``Result.ok`` unless it
    already is a ``Result``. An exception escaping ``compute`` is handled as by
    :func:`~faultline.dispatch.dispatch`.

    Returns:
        The successful result, the handler's result, or the original failed
        result when no handler matched.

    Raises:
        FaultlineUsageError: If ``compute`` returns something other than a
            ``Result``.
        Exception: An escaping exception that no handler matched.
    """

    dispatcher = HandlerDispatcher(handlers)
    registry = get_registry()
    active_before = registry.current_episode()

    try:
        result = compute()
    except Exception as exc:
        episode = episode_for_dispatch(exc, registry)
        handled, value = dispatcher.handle(FailureContext.build(exc, episode), episode, registry)
        if not handled:
            raise
        return _as_result(value)

    if not isinstance(result, Result):
        raise FaultlineUsageError(f"try_handle_some expects a Result, got {type(result).__name__}")

    if result.is_ok:
        end_consumed_episode(registry, active_before)
        return result

    episode = registry.episode(result.error_id.value)
    failure = FailureContext(
        exception=result.category,
        store=episode.store if episode is not None else PayloadStore(),
        error_id=result.error_id,
    )
    handled, value = dispatcher.handle(failure, episode, registry)
    if not handled:
        logger.debug("Failed result of episode %d left unhandled", result.error_id.value)
        return result
    return _as_result(value)


def _as_result(value: Any) -> Result:
    return value if isinstance(value, Result) else Result.ok(value)


def exception_to_result(compute: Callable[[], Any]) -> Result:
    """Run ``compute`` and convert an escaping exception into a failed :class:`Result`.

    The failed result keeps the exception as its category and refers to the
    same episode, so payloads loaded while the exception propagated stay
    attached.
    """

    try:
        value = compute()
    except Exception as exc:
        episode = episode_for_failure(exc, get_registry())
        return Result.failure(ErrorId(episode.id), category=exc)
    return _as_result(value)


__all__ = ["exception_to_result", "try_handle_some"]
