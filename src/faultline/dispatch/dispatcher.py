"""Handler dispatcher selecting the first handler satisfied by a failure."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from faultline.episodes import Episode, EpisodeRegistry, episode_for_dispatch, get_registry

from .failure_context import FailureContext
from .handler import Handler

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HandlerDispatcher:
    """Run a computation and route its failure to an ordered handler list.

    Handlers are evaluated strictly in the given order and the first one whose
    requirements are all satisfied wins, even when a later handler would match
    more specifically. A list should therefore go from specific to general and
    end with a catch-all when every failure must be handled.
    """

    def __init__(self, handlers: Iterable[Any]) -> None:
        self.handlers: list[Handler] = [Handler.from_callable(h) for h in handlers]

    def select(self, failure: FailureContext) -> Optional[tuple[Handler, tuple[Any, ...]]]:
        """Return the first satisfied handler with its bound arguments."""

        for candidate in self.handlers:
            args = candidate.bind(failure)
            if args is not None:
                return candidate, args
        return None

    def handle(
        self,
        failure: FailureContext,
        episode: Optional[Episode],
        registry: EpisodeRegistry,
    ) -> tuple[bool, Any]:
        """Invoke the first handler satisfied by ``failure``.

        The episode ends once the handler returns; if the handler raises, the
        episode stays active so the new failure keeps its payloads.

        Returns:
            ``(True, handler result)`` when a handler ran, ``(False, None)``
            when none matched.
        """

        selected = self.select(failure)
        if selected is None:
            logger.debug("No handler matched episode %d", failure.error_id.value)
            return False, None

        chosen, args = selected
        logger.debug("Episode %d handled by %r", failure.error_id.value, chosen)
        result = chosen(*args)
        if episode is not None:
            registry.end_episode(episode)
        return True, result

    def run(self, compute: Callable[[], T]) -> Any:
        """Run ``compute`` and return its value or the selected handler's value.

        Raises:
            Exception: The original failure, unchanged, when no handler is
                satisfied.
        """

        registry = get_registry()
        active_before = registry.current_episode()
        try:
            value = compute()
        except Exception as exc:
            episode = episode_for_dispatch(exc, registry)
            handled, result = self.handle(FailureContext.build(exc, episode), episode, registry)
            if not handled:
                raise
            return result

        end_consumed_episode(registry, active_before)
        return value


def end_consumed_episode(registry: EpisodeRegistry, active_before: Optional[Episode]) -> None:
    """End an episode begun since ``active_before`` whose failure was caught and not re-raised."""

    current = registry.current_episode()
    if current is not None and current is not active_before:
        registry.end_episode(current)


def dispatch(compute: Callable[[], T], *handlers: Any) -> Any:
    """Run ``compute``, handling a raised failure with the first matching handler.

    Args:
        compute: Nullary callable performing the protected work.
        *handlers: :class:`Handler` instances or zero-argument catch-all
            callables, most specific first.

    Returns:
        The value of ``compute()``, or of the handler that matched its failure.

    Raises:
        Exception: The original failure when no handler matched.
    """

    return HandlerDispatcher(handlers).run(compute)


try_catch = dispatch


__all__ = ["HandlerDispatcher", "dispatch", "end_consumed_episode", "try_catch"]
