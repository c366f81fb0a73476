"""Value helpers implementing the loose comparison rules used by filters and cursors.

Record values are plain strings, but filter values and extra record fields may be
numbers, booleans or lists. Equality and ordering therefore follow the coercing
rules of a JavaScript ``==``/``<`` rather than Python's strict ones, so ``"5"``
equals ``5`` and ``"10" > 9`` holds.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

_NAN = float("nan")
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


# An absent field. Renders as "undefined", otherwise behaves like None.
MISSING = _Missing()


def read_field(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field, MISSING)
    return getattr(record, field, MISSING)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (str, int, float))


def to_text(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if is_sequence(value):
        return ",".join("" if item is None else to_text(item) for item in value)
    return str(value)


def to_number(value: Any) -> float:
    if isinstance(value, bool) or is_number(value):
        return float(value)
    if value is MISSING:
        return _NAN
    if value is None:
        return 0.0
    if is_sequence(value):
        return to_number(to_text(value))
    text = str(value).strip()
    if not text:
        return 0.0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if "_" in text or text.lower().lstrip("+-") in {"nan", "inf", "infinity"}:
        return _NAN
    try:
        return float(text)
    except ValueError:
        return _NAN


def loose_equals(left: Any, right: Any) -> bool:
    left = None if left is MISSING else left
    right = None if right is MISSING else right
    if left is None or right is None:
        return left is None and right is None
    if is_sequence(left) and is_sequence(right):
        return left is right
    if is_sequence(left):
        left = to_text(left)
    if is_sequence(right):
        right = to_text(right)
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if _is_primitive(left) and _is_primitive(right):
        # NaN never equals anything, which is what the numeric comparison gives.
        return to_number(left) == to_number(right)
    return left == right


def compare_values(left: Any, right: Any) -> int | None:
    """Three-way compare ``left`` against ``right``.

    Returns ``-1``, ``0`` or ``1``, or ``None`` when the operands are not
    comparable (a missing field, or a side that does not coerce to a number).
    Two strings compare lexicographically; any other mix compares numerically.
    """
    if left is None or right is None or left is MISSING or right is MISSING:
        return None
    if is_sequence(left):
        left = to_text(left)
    if is_sequence(right):
        right = to_text(right)
    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)
    a = to_number(left)
    b = to_number(right)
    if math.isnan(a) or math.isnan(b):
        return None
    return (a > b) - (a < b)
