"""Originate failures with payloads attached at the raise site."""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from faultline.common import SourceLocation
from faultline.episodes import episode_for_failure, get_registry

logger = logging.getLogger(__name__)


class Fault(Exception):
    """Generic failure raised when no category exception is supplied."""

    def __init__(self, message: str = "faultline failure") -> None:
        super().__init__(message)


def _split(args: tuple[Any, ...]) -> tuple[BaseException, tuple[Any, ...]]:
    if args:
        first = args[0]
        if isinstance(first, BaseException):
            return first, args[1:]
        if isinstance(first, type) and issubclass(first, BaseException):
            return first(), args[1:]
    return Fault(), args


def exception(*args: Any) -> BaseException:
    """Build a failure carrying payloads, ready to be raised.

    The first argument may be an exception instance or class giving the
    failure category; without one a :class:`Fault` is built. Remaining
    arguments are payloads (or nullary payload factories) loaded into the
    active episode, which is begun if none is active.

    Example:
        >>> raise exception(OpenError("cannot open"), FileName(path))
    """

    category, payloads = _split(args)
    episode = episode_for_failure(category, get_registry())
    for payload in payloads:
        episode.store.load(payload)
    logger.debug("Episode %d carries %s", episode.id, type(category).__name__)
    return category


def raise_error(*args: Any) -> NoReturn:
    """Raise like :func:`exception`, also attaching the caller's :class:`SourceLocation`."""

    raise exception(*args, SourceLocation.capture(depth=1))


__all__ = ["Fault", "exception", "raise_error"]
