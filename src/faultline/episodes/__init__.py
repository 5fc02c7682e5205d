"""Failure episodes: identity, payload storage and per-context registry."""

from .episode import Episode, EpisodeState
from .episode_registry import EpisodeRegistry, context_owner, current_episode, current_id, get_registry
from .error_id import ErrorId, current_error, new_error
from .payload_store import PayloadStore, evaluate_payload
from .tagging import (
    EPISODE_ATTRIBUTE,
    episode_for_dispatch,
    episode_for_failure,
    episode_id_of,
    tag_exception,
)

__all__ = [
    "EPISODE_ATTRIBUTE",
    "Episode",
    "EpisodeRegistry",
    "EpisodeState",
    "ErrorId",
    "PayloadStore",
    "context_owner",
    "current_episode",
    "current_error",
    "current_id",
    "episode_for_dispatch",
    "episode_for_failure",
    "episode_id_of",
    "evaluate_payload",
    "get_registry",
    "new_error",
    "tag_exception",
]
