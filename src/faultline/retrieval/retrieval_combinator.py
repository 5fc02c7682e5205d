"""Post-hoc payload retrieval for failures caught by a plain ``except``.

Purpose:
    Recover payload detail after a failure has been caught by a coarse
    category match, without listing full handlers at that call site.
External Dependencies:
    None beyond the episode registry of this package.
Fallback Semantics:
    When no attempt finds all of its payload types the combinator yields
    :data:`NO_MATCH`; :func:`unwrap` turns that into a
    :class:`~faultline.core.exceptions.MismatchError`, distinct from the
    original failure.
Timeout Strategy:
    Not applicable; matching is in-memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Callable, Optional

from faultline.core.exceptions import FaultlineUsageError, MismatchError
from faultline.episodes import Episode, PayloadStore, episode_id_of, get_registry

logger = logging.getLogger(__name__)


class Attempt:
    """A set of payload types and the function to call when all are present.

    The function receives the payloads positionally, in the order of
    ``types``. An attempt without types always matches.
    """

    def __init__(self, types: tuple[type, ...], func: Callable[..., Any]) -> None:
        for payload_type in types:
            if not isinstance(payload_type, type):
                raise FaultlineUsageError(f"Attempt types must be classes, got {payload_type!r}")
        self.types = tuple(types)
        self.func = func

    def bind(self, store: PayloadStore) -> Optional[tuple[Any, ...]]:
        if not store.has_all(self.types):
            return None
        return tuple(store.require(t) for t in self.types)

    def describe(self) -> str:
        return f"({', '.join(t.__name__ for t in self.types)})"

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)

    def __repr__(self) -> str:
        return f"Attempt{self.describe()}"


def attempt(*types: type) -> Callable[[Callable[..., Any]], Attempt]:
    """Decorate a function as an :class:`Attempt` over ``types``."""

    def decorator(func: Callable[..., Any]) -> Attempt:
        return Attempt(types, func)

    return decorator


@dataclass(frozen=True)
class MatchResult:
    """Outcome of :meth:`RetrievalCombinator.match`.

    Attributes:
        matched: Whether an attempt found all of its payload types.
        value: Return value of the matched attempt.
        attempted: Descriptions of the attempts tried, for error reporting.
    """

    matched: bool
    value: Any = None
    attempted: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(matched=False)


class RetrievalCombinator:
    """Declared interest in a closed set of payload types.

    Create it before the risky code so it is in scope when the failure is
    caught. Used as a context manager it also ends the failure's episode when
    the scope exits normally, since the failure has then been consumed.

    Example:
        >>> with retrieve(FileName, Errno) as info:
        ...     try:
        ...         print_file(path)
        ...     except OpenError:
        ...         unwrap(info.match(Attempt((FileName, Errno), report)))
    """

    def __init__(self, *types: type) -> None:
        for payload_type in types:
            if not isinstance(payload_type, type):
                raise FaultlineUsageError(f"Retrieval types must be classes, got {payload_type!r}")
        self.types = tuple(types)
        registry = get_registry()
        self._start_id = registry.current_id()
        self._active_before: Optional[Episode] = registry.current_episode()

    def __enter__(self) -> "RetrievalCombinator":
        registry = get_registry()
        self._start_id = registry.current_id()
        self._active_before = registry.current_episode()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc is None:
            registry = get_registry()
            current = registry.current_episode()
            if current is not None and current is not self._active_before:
                registry.end_episode(current)
        return False

    def _episode(self, error: Optional[BaseException]) -> Optional[Episode]:
        registry = get_registry()
        if error is not None:
            return registry.episode(episode_id_of(error))
        current = registry.current_episode()
        if current is not None:
            return current
        last = registry.last_ended_episode()
        if last is not None and last.id > self._start_id:
            return last
        return None

    def match(self, *attempts: Attempt, error: Optional[BaseException] = None) -> MatchResult:
        """Run the first attempt whose payload types are all attached.

        Args:
            *attempts: Attempts tried strictly in order.
            error: The caught exception; when omitted the active episode (or
                the one resolved since this combinator was created) is used.

        Returns:
            MatchResult: The matched attempt's value, or an unmatched result
            listing the attempts tried.

        Raises:
            FaultlineUsageError: If an attempt names a type outside the
                declared set.
        """

        for candidate in attempts:
            undeclared = [t.__name__ for t in candidate.types if t not in self.types]
            if undeclared:
                raise FaultlineUsageError(f"{candidate!r} uses undeclared payload types: {undeclared}")

        episode = self._episode(error)
        store = episode.store if episode is not None else PayloadStore()
        for candidate in attempts:
            args = candidate.bind(store)
            if args is not None:
                logger.debug("Retrieval matched %r", candidate)
                return MatchResult(matched=True, value=candidate(*args))

        logger.debug("No retrieval attempt matched %r", store)
        return MatchResult(matched=False, attempted=[c.describe() for c in attempts])

    def __repr__(self) -> str:
        return f"RetrievalCombinator({', '.join(t.__name__ for t in self.types)})"


def retrieve(*types: type) -> RetrievalCombinator:
    """Declare interest in ``types`` ahead of a failure."""

    return RetrievalCombinator(*types)


def unwrap(result: MatchResult) -> Any:
    """Return the matched value, raising :class:`MismatchError` when nothing matched."""

    if not result.matched:
        raise MismatchError(result.attempted)
    return result.value


__all__ = [
    "NO_MATCH",
    "Attempt",
    "MatchResult",
    "RetrievalCombinator",
    "attempt",
    "retrieve",
    "unwrap",
]
