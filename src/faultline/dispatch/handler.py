"""Handler descriptors used by the dispatcher."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Optional

from faultline.core.exceptions import FaultlineUsageError

from .failure_context import FailureContext
from .requirements import NOT_SATISFIED, Requirement, as_requirement


class Handler:
    """A callable paired with the requirements that select it.

    The callable receives one positional argument per requirement, in
    declaration order: the exception for a ``Catch``, the payload for a
    payload requirement. A handler without requirements is a catch-all and is
    called without arguments.

    Args:
        func: Callable invoked when the handler is selected.
        *requirements: ``Requirement`` instances or shorthand classes, see
            :func:`~faultline.dispatch.requirements.as_requirement`.
        name: Optional label used in logs.
    """

    def __init__(self, func: Callable[..., Any], *requirements: Any, name: Optional[str] = None) -> None:
        if not callable(func):
            raise FaultlineUsageError(f"Handler function must be callable, got {func!r}")
        self.func = func
        self.requirements: tuple[Requirement, ...] = tuple(as_requirement(r) for r in requirements)
        self.name = name or getattr(func, "__name__", type(func).__name__)

    @classmethod
    def from_callable(cls, obj: Any) -> "Handler":
        """Return ``obj`` as a handler; a plain callable becomes a catch-all.

        Raises:
            FaultlineUsageError: When a plain callable cannot be called without
                arguments.
        """

        if isinstance(obj, Handler):
            return obj
        if not callable(obj):
            raise FaultlineUsageError(f"Handlers must be Handler instances or callables, got {obj!r}")
        try:
            inspect.signature(obj).bind()
        except TypeError as e:
            raise FaultlineUsageError(
                f"Plain callable {getattr(obj, '__name__', obj)!r} used as a catch-all must accept no arguments; "
                "declare its requirements with handler(...)"
            ) from e
        except ValueError:
            # Builtins without an introspectable signature are taken at face value.
            pass
        return cls(obj)

    @property
    def is_catch_all(self) -> bool:
        return not self.requirements

    def bind(self, failure: FailureContext) -> Optional[tuple[Any, ...]]:
        """Return the arguments for ``func`` if every requirement is satisfied."""

        bound = []
        for requirement in self.requirements:
            value = requirement.bind(failure)
            if value is NOT_SATISFIED:
                return None
            bound.append(value)
        return tuple(bound)

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)

    def __repr__(self) -> str:
        requirements = ", ".join(r.describe() for r in self.requirements)
        return f"Handler({self.name}: [{requirements}])"


def handler(*requirements: Any, name: Optional[str] = None) -> Callable[[Callable[..., Any]], Handler]:
    """Decorate a function as a :class:`Handler` with the given requirements.

    Example:
        >>> @handler(catch(OSError), FileName)
        ... def report(error, file_name):
        ...     return f"{file_name.value}: {error}"
    """

    def decorator(func: Callable[..., Any]) -> Handler:
        return Handler(func, *requirements, name=name)

    return decorator


__all__ = ["Handler", "handler"]
