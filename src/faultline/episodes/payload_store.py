"""Type-keyed payload table owned by a single failure episode."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class PayloadStore:
    """Hold at most one current value per payload type.

    Values are keyed by their exact runtime type. Writing a value whose type is
    already present replaces the earlier value; insertion order of the first
    write per type is preserved for diagnostic output.
    """

    def __init__(self) -> None:
        self._values: dict[type, Any] = {}
        self._released = False

    def put(self, value: Any) -> None:
        """Store ``value`` under ``type(value)``, overwriting any earlier value.

        Args:
            value: Payload instance to record.

        Raises:
            TypeError: If ``value`` is ``None``; an absent payload is expressed
                by not loading it.
        """

        if value is None:
            raise TypeError("None cannot be stored as a payload")
        if self._released:
            logger.debug("Discarding %s written to a released store", type(value).__name__)
            return
        self._values[type(value)] = value

    def load(self, item: Any) -> None:
        """Store ``item``, evaluating it first when it is a payload factory.

        Factories returning ``None`` attach nothing.
        """

        value = evaluate_payload(item)
        if value is not None:
            self.put(value)

    def get(self, payload_type: type[T], default: Optional[T] = None) -> Optional[T]:
        """Return the value stored for ``payload_type`` or ``default``."""

        return self._values.get(payload_type, default)

    def require(self, payload_type: type[T]) -> T:
        """Return the value stored for ``payload_type``.

        Raises:
            KeyError: If no value of that type has been stored.
        """

        value = self._values.get(payload_type, _MISSING)
        if value is _MISSING:
            raise KeyError(payload_type.__name__)
        return value

    def has(self, payload_type: type) -> bool:
        """Return whether a value of exactly ``payload_type`` is present."""

        return payload_type in self._values

    def has_all(self, payload_types: tuple[type, ...]) -> bool:
        """Return whether every type in ``payload_types`` is present."""

        return all(payload_type in self._values for payload_type in payload_types)

    def types(self) -> list[type]:
        """Return stored payload types in first-write order."""

        return list(self._values)

    def items(self) -> list[tuple[type, Any]]:
        """Return ``(type, value)`` pairs in first-write order."""

        return list(self._values.items())

    def release(self) -> None:
        """Drop all values; later writes are ignored."""

        self._values.clear()
        self._released = True

    @property
    def released(self) -> bool:
        """Return whether the owning episode has released this store."""

        return self._released

    def __contains__(self, payload_type: object) -> bool:
        return payload_type in self._values

    def __iter__(self) -> Iterator[type]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._values)
        return f"PayloadStore([{names}])"


def evaluate_payload(item: Any) -> Any:
    """Return ``item``, calling it first when it is a nullary payload factory.

    A factory may return ``None`` to signal that it has nothing to attach.
    """

    return item() if callable(item) else item


__all__ = ["PayloadStore", "evaluate_payload"]
