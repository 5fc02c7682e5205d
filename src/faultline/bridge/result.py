"""Explicit failure-carrying return value.

A :class:`Result` lets code signal failure by returning instead of raising.
A failed result carries the :class:`~faultline.episodes.ErrorId` of its
episode, so loaders and handlers work with it exactly as with a raised
exception.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from faultline.core.exceptions import ResultError
from faultline.episodes import EPISODE_ATTRIBUTE, ErrorId, current_error, new_error

T = TypeVar("T")


class Result(Generic[T]):
    """Either a value or the id of the failure episode that replaced it."""

    __slots__ = ("_value", "_error_id", "_category")

    def __init__(
        self,
        value: Optional[T] = None,
        error_id: ErrorId = ErrorId(),
        category: Optional[BaseException] = None,
    ) -> None:
        self._value = value
        self._error_id = error_id
        self._category = category

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value)

    @classmethod
    def failure(
        cls,
        error_id: Optional[ErrorId] = None,
        category: Optional[BaseException] = None,
    ) -> "Result[T]":
        """Build a failed result.

        Args:
            error_id: Episode of the failure. Defaults to the active episode,
                originating one when none is active.
            category: Optional exception describing the failure category, so
                ``Catch`` requirements can match value-style failures.
        """

        if error_id is None or not error_id:
            error_id = current_error() or new_error()
        return cls(error_id=error_id, category=category)

    @property
    def is_ok(self) -> bool:
        return not self._error_id

    @property
    def is_failure(self) -> bool:
        return bool(self._error_id)

    @property
    def error_id(self) -> ErrorId:
        return self._error_id

    @property
    def category(self) -> Optional[BaseException]:
        return self._category

    def value(self) -> T:
        """Return the value, raising the failure when this result holds one.

        The raised exception carries the same episode, so payloads attached so
        far stay visible to an exception-style dispatcher.

        Raises:
            BaseException: The category exception when one was given, else
                :class:`ResultError`.
        """

        if self.is_ok:
            return self._value  # type: ignore[return-value]
        error = self._category if self._category is not None else ResultError(self._error_id.value, None)
        setattr(error, EPISODE_ATTRIBUTE, self._error_id.value)
        raise error

    def value_or(self, default: Any) -> Any:
        return self._value if self.is_ok else default

    def __bool__(self) -> bool:
        return self.is_ok

    def __repr__(self) -> str:
        if self.is_ok:
            return f"Result.ok({self._value!r})"
        if self._category is not None:
            return f"Result.failure({self._error_id.value}, {type(self._category).__name__})"
        return f"Result.failure({self._error_id.value})"


__all__ = ["Result"]
