"""Relay window selection over an already filtered and ordered sequence.

The selection runs in a fixed order: trim through ``after``, trim through
``before``, then bound the size with ``first``/``last``. Page flags accumulate
along the way and default to ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kvsource.schemas.paging import OrderClause
from kvsource.services.cursors import CursorPayload, cursor_matches


@dataclass
class Window:
    records: list[Any] = field(default_factory=list)
    has_previous_page: bool = False
    has_next_page: bool = False


def _trim_after(records: list[Any], order: list[OrderClause], cursor: CursorPayload) -> list[Any]:
    for index, record in enumerate(records):
        if cursor_matches(record, order, cursor):
            return records[index + 1:]
    return []


def _trim_before(records: list[Any], order: list[OrderClause], cursor: CursorPayload) -> list[Any]:
    for index in range(len(records) - 1, -1, -1):
        if cursor_matches(records[index], order, cursor):
            return records[:index]
    return []


def _slice_start(window: Window, first: int) -> None:
    if first >= len(window.records):
        return
    window.records = window.records[:first]
    window.has_next_page = True


def _slice_end(window: Window, last: int) -> None:
    if last >= len(window.records):
        return
    window.records = window.records[len(window.records) - last:]
    window.has_previous_page = True


def select_window(
    records: list[Any],
    order: list[OrderClause],
    *,
    first: int | None = None,
    last: int | None = None,
    before: CursorPayload | None = None,
    after: CursorPayload | None = None,
) -> Window:
    """Apply cursor trimming and size bounds to ``records``.

    ``before``/``after`` are decoded cursor payloads. A trim that finds no
    matching record empties the sequence; the page flag it owns is still set
    because the trim ran.
    """
    window = Window(records=list(records))

    if after is not None and window.records:
        window.has_previous_page = True
        window.records = _trim_after(window.records, order, after)
    if before is not None and window.records:
        window.has_next_page = True
        window.records = _trim_before(window.records, order, before)

    if first is not None and last is not None:
        # Widest window first, the smaller count narrows inside it.
        if first > last:
            _slice_start(window, first)
            _slice_end(window, last)
        elif last > first:
            _slice_end(window, last)
            _slice_start(window, first)
        else:
            _slice_start(window, first)
    elif first is not None:
        _slice_start(window, first)
    elif last is not None:
        _slice_end(window, last)

    return window
