"""Accessors: how to read start and end values out of an opaque event."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable


def field_getter(field: str | Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Turn a field name into a getter; callables pass through.

    A field name reads a mapping key when the event is a mapping that has
    it, and falls back to an attribute of the same name otherwise.
    """
    if callable(field):
        return field
    if not isinstance(field, str):
        raise TypeError(
            f"Accessor field must be a name or a callable, got {type(field).__name__}."
        )

    def getter(event: Any) -> Any:
        if isinstance(event, Mapping) and field in event:
            return event[field]
        return getattr(event, field)

    getter.__name__ = f"get_{field}"
    return getter


@dataclass(frozen=True)
class Accessors:
    """Pair of callables extracting the start and end value of an event."""

    start: Callable[[Any], Any]
    end: Callable[[Any], Any]

    @classmethod
    def from_fields(
        cls,
        start: str | Callable[[Any], Any] = "start",
        end: str | Callable[[Any], Any] = "end",
    ) -> Accessors:
        """Build accessors from field names or callables.

        Usage::

            Accessors.from_fields("dtstart", "dtend")
            Accessors.from_fields(start=lambda e: e.begin, end="finish")
        """
        return cls(start=field_getter(start), end=field_getter(end))
