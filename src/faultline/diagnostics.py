"""Human-readable dump of the payloads attached to a failure.

Used as a fallback report when no handler recognises a failure, so whatever
was attached on the way up is still shown to the operator.
"""

from __future__ import annotations

import sys
from typing import Optional

from faultline.config import get_config
from faultline.episodes import Episode, episode_id_of, get_registry


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."


def _episode_for(error: Optional[BaseException]) -> Optional[Episode]:
    registry = get_registry()
    if error is not None:
        tagged = episode_id_of(error)
        if tagged:
            return registry.episode(tagged)
    return registry.current_episode() or registry.last_ended_episode()


def diagnostic_information(error: Optional[BaseException] = None) -> str:
    """Describe a failure's episode, category and payloads.

    Args:
        error: The failure to describe. Defaults to the active episode, or the
            most recently resolved one.

    Returns:
        str: One header line followed by one line per attached payload.
    """

    limit = get_config().diagnostic_value_max_length
    episode = _episode_for(error)
    exc = error if error is not None else (episode.exception if episode is not None else None)

    if episode is None:
        lines = ["No failure episode"]
    else:
        lines = [f"Episode {episode.id} ({episode.state.value})"]
    if exc is not None:
        exc_type = type(exc)
        lines.append(f"  exception: {exc_type.__module__}.{exc_type.__qualname__}: {_truncate(str(exc), limit)}")
    if episode is not None:
        for payload_type, value in episode.store.items():
            lines.append(f"  {payload_type.__qualname__}: {_truncate(repr(value), limit)}")
    return "\n".join(lines) + "\n"


def current_exception_diagnostic_information() -> str:
    """Describe the exception currently being handled, for use inside ``except`` blocks."""

    return diagnostic_information(sys.exc_info()[1])


__all__ = ["current_exception_diagnostic_information", "diagnostic_information"]
