"""Scoped guard that attaches payloads to a failure leaving its scope.

Purpose:
    Let intermediate code contribute diagnostic payloads to a failure without
    receiving or re-raising it. Payloads registered on an :class:`InfoLoader`
    are committed only when the ``with`` block is left through a failure.
External Dependencies:
    None beyond the episode registry of this package.
Fallback Semantics:
    A loader left normally, or by a ``BaseException`` that is not an
    ``Exception`` (such as ``GeneratorExit``), discards its pending items
    without evaluating lazy factories. Structural misuse is logged unless
    debug checks are enabled, in which case it raises
    :class:`~faultline.core.exceptions.StructuralMisuseError`.
Timeout Strategy:
    Not applicable; the guard performs in-memory bookkeeping only.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Optional

from faultline.bridge.result import Result
from faultline.config import get_config
from faultline.core.exceptions import StructuralMisuseError
from faultline.episodes import (
    Episode,
    EpisodeRegistry,
    context_owner,
    episode_for_failure,
    get_registry,
)

logger = logging.getLogger(__name__)


class InfoLoader:
    """Pending payloads committed to the active episode on failure-exit.

    Args:
        *items: Payload values, or nullary callables producing a payload. A
            callable is evaluated only when the scope exits through a failure,
            capturing state at that moment rather than at handling time.

    Example:
        >>> with on_error(FileName("data.bin"), Errno.current):
        ...     read_header("data.bin")
    """

    def __init__(self, *items: Any) -> None:
        for item in items:
            if item is None:
                raise TypeError("None cannot be loaded as a payload")
        self._items = items
        self._registry: Optional[EpisodeRegistry] = None
        self._failed = False
        self._result: Optional[Result] = None
        self.committed_to: Optional[int] = None

    def __enter__(self) -> "InfoLoader":
        self._registry = get_registry()
        self._registry.push_loader(self)
        return self

    def mark_failure(self) -> None:
        """Declare that the scope is being left with a failure-valued return."""

        self._failed = True

    def check(self, result: Any) -> Any:
        """Mark the scope as failing when ``result`` is a failed :class:`Result`.

        Returns:
            ``result`` unchanged, so the call can wrap a ``return`` expression.
        """

        if isinstance(result, Result) and result.is_failure:
            self._failed = True
            self._result = result
        return result

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        registry = self._registry
        self._registry = None
        if registry is None:
            self._misuse("Loader exited without being entered")
            return False

        if not registry.owned_by(context_owner()):
            self._misuse("Loader exited from a different execution context than it was entered in")
            return False

        in_order = registry.pop_loader(self)

        # GeneratorExit, KeyboardInterrupt and SystemExit leave the scope without a failure.
        failure = exc if isinstance(exc, Exception) else None
        if failure is not None or self._failed:
            episode = self._target_episode(registry, failure)
            if episode is not None:
                self._commit(episode)
        else:
            logger.debug("Loader %r left normally; discarding %d pending item(s)", self, len(self._items))

        if not in_order:
            self._misuse("Loader exited out of last-in-first-out order")
        return False

    def _target_episode(self, registry: EpisodeRegistry, exc: Optional[BaseException]) -> Optional[Episode]:
        if exc is not None:
            return episode_for_failure(exc, registry)
        if self._result is not None:
            episode = registry.episode(self._result.error_id.value)
            if episode is not None and episode.active:
                return episode
            logger.debug("Episode of %r is no longer active", self._result)
            return None
        return registry.begin_episode()

    def _commit(self, episode: Episode) -> None:
        for item in self._items:
            episode.store.load(item)
        self.committed_to = episode.id
        logger.debug("Loader committed %d payload(s) to episode %d", len(self._items), episode.id)

    def _misuse(self, message: str) -> None:
        if get_config().debug_checks:
            raise StructuralMisuseError(message, loader=repr(self))
        logger.warning("%s: %r", message, self)

    def __repr__(self) -> str:
        names = ", ".join(getattr(item, "__name__", type(item).__name__) for item in self._items)
        return f"InfoLoader({names})"


def on_error(*items: Any) -> InfoLoader:
    """Return a loader committing ``items`` if its ``with`` block fails."""

    return InfoLoader(*items)


preload = on_error


__all__ = ["InfoLoader", "on_error", "preload"]
