"""The failure a handler list is matched against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from faultline.episodes import Episode, ErrorId, PayloadStore


@dataclass(frozen=True)
class FailureContext:
    """Category and payloads of one failure at a handling site.

    Attributes:
        exception: The failure's category value. ``None`` for value-style
            failures that carry no category exception.
        store: Payloads attached to the failure's episode. Empty when the
            failure never reached a loader or raise helper.
        error_id: Id of the failure's episode, ``ErrorId(0)`` when it has none.
    """

    exception: Optional[BaseException] = None
    store: PayloadStore = field(default_factory=PayloadStore)
    error_id: ErrorId = ErrorId()

    @classmethod
    def build(cls, exception: Optional[BaseException], episode: Optional[Episode]) -> "FailureContext":
        if episode is None:
            return cls(exception=exception)
        return cls(exception=exception, store=episode.store, error_id=ErrorId(episode.id))


__all__ = ["FailureContext"]
