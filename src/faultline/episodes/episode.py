"""Episode data model: one originating failure and its payload store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .payload_store import PayloadStore


class EpisodeState(str, Enum):
    """Lifecycle states of an episode.

    Attributes:
        ACTIVE: Id assigned and the store accepts payloads.
        RESOLVED: The failure was consumed; the store is retained read-only
            until the next episode of the same context ends.
    """

    ACTIVE = "active"
    RESOLVED = "resolved"


@dataclass(eq=False)
class Episode:
    """Lifetime of one originating failure.

    Attributes:
        id: Process-unique, monotonically increasing identifier.
        store: Payloads attached while the failure propagated.
        state: Current lifecycle state.
        exception: The exception that originated or last carried the episode,
            when the failure was signalled by raising.
    """

    id: int
    store: PayloadStore = field(default_factory=PayloadStore)
    state: EpisodeState = EpisodeState.ACTIVE
    exception: Optional[BaseException] = None

    @property
    def active(self) -> bool:
        return self.state is EpisodeState.ACTIVE

    def resolve(self) -> None:
        self.state = EpisodeState.RESOLVED

    def __repr__(self) -> str:
        return f"Episode(id={self.id}, state={self.state.value}, store={self.store!r})"


__all__ = ["Episode", "EpisodeState"]
