"""Declarative requirements a handler places on a failure.

Each requirement either rejects a failure or binds one positional argument for
the handler. Handlers list them in the order their arguments are declared.
"""

from __future__ import annotations

import abc
from typing import Any

from faultline.core.exceptions import FaultlineUsageError

from .failure_context import FailureContext

NOT_SATISFIED = object()
"""Sentinel returned by :meth:`Requirement.bind` when the failure is rejected."""


class Requirement(abc.ABC):
    """Base class of handler requirements."""

    @abc.abstractmethod
    def bind(self, failure: FailureContext) -> Any:
        """Return the value bound for the handler, or ``NOT_SATISFIED``."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Return a short human-readable form used in logs."""

    def __repr__(self) -> str:
        return self.describe()


class Catch(Requirement):
    """Category predicate: the failure's exception is an instance of a listed type.

    ``Catch()`` with no types accepts any exception. Value-style failures
    without a category exception never satisfy a ``Catch``.
    """

    def __init__(self, *exception_types: type[BaseException]) -> None:
        for exception_type in exception_types:
            if not (isinstance(exception_type, type) and issubclass(exception_type, BaseException)):
                raise FaultlineUsageError(f"catch() expects exception classes, got {exception_type!r}")
        self.exception_types = exception_types or (BaseException,)

    def bind(self, failure: FailureContext) -> Any:
        if failure.exception is not None and isinstance(failure.exception, self.exception_types):
            return failure.exception
        return NOT_SATISFIED

    def describe(self) -> str:
        return f"catch({', '.join(t.__name__ for t in self.exception_types)})"


class Require(Requirement):
    """A payload of exactly ``payload_type`` must be attached."""

    def __init__(self, payload_type: type) -> None:
        if not isinstance(payload_type, type):
            raise FaultlineUsageError(f"Payload requirements must be types, got {payload_type!r}")
        self.payload_type = payload_type

    def bind(self, failure: FailureContext) -> Any:
        value = failure.store.get(self.payload_type)
        return NOT_SATISFIED if value is None else value

    def describe(self) -> str:
        return self.payload_type.__name__


class Match(Require):
    """A payload of ``payload_type`` must be attached and equal one of ``literals``.

    A literal that is itself a ``payload_type`` instance is compared with the
    whole payload; any other literal is compared with the payload's ``value``
    attribute, falling back to the payload when it has none.
    """

    def __init__(self, payload_type: type, *literals: Any) -> None:
        super().__init__(payload_type)
        if not literals:
            raise FaultlineUsageError(f"match({payload_type.__name__}) needs at least one literal")
        self.literals = literals

    def bind(self, failure: FailureContext) -> Any:
        value = super().bind(failure)
        if value is NOT_SATISFIED:
            return NOT_SATISFIED
        return value if any(self._equals(value, literal) for literal in self.literals) else NOT_SATISFIED

    def _equals(self, payload: Any, literal: Any) -> bool:
        if isinstance(literal, self.payload_type):
            return payload == literal
        return getattr(payload, "value", payload) == literal

    def describe(self) -> str:
        return f"match({self.payload_type.__name__}, {', '.join(map(repr, self.literals))})"


def catch(*exception_types: type[BaseException]) -> Catch:
    return Catch(*exception_types)


def match(payload_type: type, *literals: Any) -> Match:
    return Match(payload_type, *literals)


def as_requirement(spec: Any) -> Requirement:
    """Normalise a handler requirement declaration.

    Accepts :class:`Requirement` instances, exception classes (shorthand for
    ``Catch``) and other classes (shorthand for ``Require``).

    Raises:
        FaultlineUsageError: For anything else.
    """

    if isinstance(spec, Requirement):
        return spec
    if isinstance(spec, type):
        if issubclass(spec, BaseException):
            return Catch(spec)
        return Require(spec)
    raise FaultlineUsageError(f"Unsupported handler requirement: {spec!r}")


__all__ = [
    "NOT_SATISFIED",
    "Catch",
    "Match",
    "Require",
    "Requirement",
    "as_requirement",
    "catch",
    "match",
]
