"""Per execution-context registry of the active failure episode.

Purpose:
    Track which failure episode is currently propagating in the calling thread
    or asyncio task, own that episode's payload store and the stack of open
    loader scopes.
External Dependencies:
    Standard library only (`contextvars`, `threading`, `asyncio`).
Fallback Semantics:
    A registry is created lazily the first time a context asks for one. A
    context that inherited another context's registry through context copying
    (for example a task spawned from a task that already failed) receives a
    fresh registry instead of sharing the parent's.
Timeout Strategy:
    Not applicable; all operations are in-memory bookkeeping.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from contextvars import ContextVar
from typing import Any, Optional

from .episode import Episode

logger = logging.getLogger(__name__)

_id_lock = threading.Lock()
_id_counter = itertools.count(1)


def _allocate_id() -> int:
    """Return the next process-wide episode id."""

    with _id_lock:
        return next(_id_counter)


def context_owner() -> tuple[int, Any]:
    """Identify the calling execution context as ``(thread ident, task)``."""

    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    return threading.get_ident(), task


class EpisodeRegistry:
    """Failure-episode state owned by one execution context.

    Attributes:
        owner: ``(thread ident, asyncio task or None)`` of the owning context.
    """

    def __init__(self, owner: Optional[tuple[int, Any]] = None) -> None:
        self.owner = owner if owner is not None else context_owner()
        self._active: Optional[Episode] = None
        self._last_ended: Optional[Episode] = None
        self._last_id = 0
        self._loaders: list[Any] = []

    def owned_by(self, owner: tuple[int, Any]) -> bool:
        """Return whether ``owner`` identifies this registry's context."""

        return self.owner[0] == owner[0] and self.owner[1] is owner[1]

    def current_episode(self) -> Optional[Episode]:
        """Return the active episode, or ``None`` when no failure is in flight."""

        return self._active

    def last_ended_episode(self) -> Optional[Episode]:
        """Return the most recently resolved episode, if it is still retained."""

        return self._last_ended

    def begin_episode(self) -> Episode:
        """Return the active episode, allocating one with a fresh id if needed."""

        if self._active is not None:
            return self._active

        episode = Episode(_allocate_id())
        self._active = episode
        self._last_id = episode.id
        logger.debug("Episode %d started", episode.id)
        return episode

    def end_episode(self, episode: Optional[Episode] = None) -> Optional[Episode]:
        """Resolve the active episode.

        The resolved episode is retained read-only so post-hoc retrieval and
        diagnostic dumps can still inspect it; the store of the episode it
        supersedes is released.

        Args:
            episode: When given, the active episode is only resolved if it is
                this one.

        Returns:
            The resolved episode, or ``None`` when nothing was resolved.
        """

        active = self._active
        if active is None or (episode is not None and episode is not active):
            return None

        active.resolve()
        self._active = None
        if self._last_ended is not None:
            self._last_ended.store.release()
        self._last_ended = active
        logger.debug("Episode %d resolved", active.id)
        return active

    def episode(self, episode_id: int) -> Optional[Episode]:
        """Look up a still-known episode by id."""

        if not episode_id:
            return None
        for candidate in (self._active, self._last_ended):
            if candidate is not None and candidate.id == episode_id:
                return candidate
        return None

    def current_id(self) -> int:
        """Return the id most recently allocated in this context, ``0`` if none."""

        return self._last_id

    def push_loader(self, loader: Any) -> None:
        self._loaders.append(loader)

    def pop_loader(self, loader: Any) -> bool:
        """Remove ``loader`` from the loader stack.

        Returns:
            ``True`` when ``loader`` was the innermost open loader, ``False``
            when it was removed out of order or was not on the stack.
        """

        if self._loaders and self._loaders[-1] is loader:
            self._loaders.pop()
            return True
        if loader in self._loaders:
            self._loaders.remove(loader)
        return False

    @property
    def loader_depth(self) -> int:
        return len(self._loaders)

    def reset(self) -> None:
        """Drop every episode and open loader tracked by this registry."""

        if self._active is not None:
            self._active.store.release()
        if self._last_ended is not None:
            self._last_ended.store.release()
        self._active = None
        self._last_ended = None
        self._loaders.clear()


_registry_var: ContextVar[Optional[EpisodeRegistry]] = ContextVar("faultline_registry", default=None)
"""Context variable holding the registry of the calling execution context."""


def get_registry() -> EpisodeRegistry:
    """Return the registry of the calling execution context, creating it on first use."""

    owner = context_owner()
    registry = _registry_var.get()
    if registry is None or not registry.owned_by(owner):
        registry = EpisodeRegistry(owner)
        _registry_var.set(registry)
        logger.debug("Created episode registry for thread %s", owner[0])
    return registry


def current_episode() -> Optional[Episode]:
    """Return the active episode of the calling context."""

    return get_registry().current_episode()


def current_id() -> int:
    """Return the most recently allocated episode id of the calling context."""

    return get_registry().current_id()


__all__ = [
    "EpisodeRegistry",
    "context_owner",
    "current_episode",
    "current_id",
    "get_registry",
]
