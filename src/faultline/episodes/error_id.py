"""Lightweight handle on a failure episode."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .episode_registry import get_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorId:
    """Identifier of a failure episode.

    An ``ErrorId`` of ``0`` means "no failure". It is what value-style code
    threads upward in place of an exception.
    """

    value: int = 0

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def load(self, *items: Any) -> "ErrorId":
        """Write ``items`` into this episode's store immediately.

        Nullary callables are evaluated first. Loading into an episode that is
        no longer active is a no-op.
        """

        episode = get_registry().episode(self.value)
        if episode is None or not episode.active:
            logger.debug("Ignoring load into inactive episode %d", self.value)
            return self
        for item in items:
            episode.store.load(item)
        return self


def current_error() -> ErrorId:
    """Return the id of the active episode, or ``ErrorId(0)`` when none is active."""

    episode = get_registry().current_episode()
    return ErrorId(episode.id) if episode is not None else ErrorId()


def new_error(*items: Any) -> ErrorId:
    """Originate a value-style failure, attaching ``items`` immediately.

    Reuses the active episode when one exists.
    """

    episode = get_registry().begin_episode()
    for item in items:
        episode.store.load(item)
    return ErrorId(episode.id)


__all__ = ["ErrorId", "current_error", "new_error"]
