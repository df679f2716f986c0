"""Serializers: convert layout output to JS-transferable formats."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Callable

import numpy as np
from jinja2.utils import htmlsafe_json_dumps

from ..layout.geometry import StyledEvent


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def styled_events_to_records(
    styled: Sequence[StyledEvent],
    event_id: Callable[[Any], Any] | None = None,
) -> list[dict]:
    """Build ``{"id", "style"}`` records; ``id`` defaults to render position."""
    records = []
    for position, item in enumerate(styled):
        ident = event_id(item.event) if event_id is not None else position
        records.append({"id": ident, "style": item.style.to_dict()})
    return records


def serialize_styled_events(
    styled: Sequence[StyledEvent],
    event_id: Callable[[Any], Any] | None = None,
    html_safe: bool = False,
) -> str:
    """Serialize styled events as a JSON list in render order.

    With ``html_safe`` the result escapes ``<``, ``>``, ``&`` and ``'`` so
    it can be embedded in a ``<script>`` tag of an autoescaped template.
    """
    records = styled_events_to_records(styled, event_id)
    if html_safe:
        return htmlsafe_json_dumps(records, default=_json_default)
    return json.dumps(records, default=_json_default)
