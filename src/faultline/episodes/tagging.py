"""Link exception objects to the episode they carry."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .episode import Episode
from .episode_registry import EpisodeRegistry

logger = logging.getLogger(__name__)

EPISODE_ATTRIBUTE = "__faultline_episode__"


def episode_id_of(exc: BaseException) -> int:
    """Return the episode id tagged on ``exc``, ``0`` when untagged."""

    return getattr(exc, EPISODE_ATTRIBUTE, 0)


def tag_exception(exc: BaseException, episode: Episode) -> None:
    """Record ``episode`` as the episode carried by ``exc``."""

    try:
        setattr(exc, EPISODE_ATTRIBUTE, episode.id)
    except AttributeError:
        # Exceptions declaring __slots__ cannot carry the tag; the active
        # episode still reaches the dispatcher.
        logger.debug("Cannot tag %s with episode %d", type(exc).__name__, episode.id)
    episode.exception = exc


def _in_flight(exc: BaseException) -> bool:
    """Return whether ``exc`` is being handled or is the cause of the exception being handled."""

    current = sys.exc_info()[1]
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        if current is exc:
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def _superseded(episode: Episode, exc: BaseException) -> bool:
    stale = episode.exception
    return stale is not None and stale is not exc and not _in_flight(stale)


def episode_for_failure(exc: BaseException, registry: EpisodeRegistry) -> Episode:
    """Return the episode ``exc`` writes to, beginning one when needed.

    An exception keeps the episode it was tagged with while that episode is
    active. An untagged exception joins the active episode when that episode
    has no exception yet, or when its exception is still being handled (a
    failure translated inside an ``except`` block). An active episode whose
    exception was caught and dropped is ended and a fresh one allocated.
    """

    episode = registry.episode(episode_id_of(exc))
    if episode is None or not episode.active:
        active = registry.current_episode()
        if active is not None and _superseded(active, exc):
            logger.debug("Episode %d superseded by a new %s", active.id, type(exc).__name__)
            registry.end_episode(active)
        episode = registry.begin_episode()
        tag_exception(exc, episode)
    elif episode.exception is None:
        episode.exception = exc
    return episode


def episode_for_dispatch(exc: BaseException, registry: EpisodeRegistry) -> Optional[Episode]:
    """Return the episode to match ``exc`` against without allocating one."""

    tagged = episode_id_of(exc)
    if tagged:
        return registry.episode(tagged)
    return registry.current_episode()


__all__ = [
    "EPISODE_ATTRIBUTE",
    "episode_for_dispatch",
    "episode_for_failure",
    "episode_id_of",
    "tag_exception",
]
