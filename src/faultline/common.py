"""Payload types shared across applications.

Any Python object can be attached to a failure; the types defined here cover
the details most programs want to report: where a failure was raised, which
file it concerned and the operating-system error number behind it.
"""

from __future__ import annotations

import inspect
import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    """File, line and function where a failure was raised."""

    file: str
    line: int
    function: str

    @classmethod
    def capture(cls, depth: int = 1) -> "SourceLocation":
        """Describe the frame ``depth`` levels above the caller of ``capture``."""

        frame = inspect.currentframe()
        try:
            target = frame.f_back if frame is not None else None
            for _ in range(depth):
                if target is None or target.f_back is None:
                    break
                target = target.f_back
            if target is None:
                return cls(file="<unknown>", line=0, function="<unknown>")
            return cls(file=target.f_code.co_filename, line=target.f_lineno, function=target.f_code.co_name)
        finally:
            del frame

    def __str__(self) -> str:
        return f"{self.file}:{self.line} in {self.function}"


@dataclass(frozen=True)
class FileName:
    """Name of the file an operation failed on."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Errno:
    """Operating-system error number."""

    value: int

    @classmethod
    def current(cls) -> Optional["Errno"]:
        """Return the errno of the exception currently being handled, if any.

        Suited as a lazy loader factory: inside a loader's exit the
        propagating exception is the one being handled. The cause and context
        chain is searched, so an ``OSError`` re-raised as a domain exception
        still yields its errno.
        """

        exc = sys.exc_info()[1]
        seen: set[int] = set()
        while exc is not None and id(exc) not in seen:
            seen.add(id(exc))
            errno = getattr(exc, "errno", None)
            if isinstance(errno, int):
                return cls(errno)
            exc = exc.__cause__ or exc.__context__
        return None

    @property
    def name(self) -> str:
        return os.strerror(self.value)

    def __str__(self) -> str:
        return f"{self.value} ({self.name})"


__all__ = ["Errno", "FileName", "SourceLocation"]
