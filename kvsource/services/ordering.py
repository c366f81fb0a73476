from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from kvsource.schemas.paging import OrderClause
from kvsource.services.coercion import read_field, to_text


def as_order_clauses(order: Iterable[OrderClause | Mapping[str, Any]] | None) -> list[OrderClause]:
    return [
        item if isinstance(item, OrderClause) else OrderClause.model_validate(item)
        for item in (order or [])
    ]


def sort_key_for(record: Any, order: list[OrderClause]) -> list[str]:
    return [to_text(read_field(record, clause.field)) for clause in order]


def apply_order(records: Iterable[Any], order: Iterable[OrderClause | Mapping[str, Any]] | None) -> list[Any]:
    """Return ``records`` in a stable order defined by ``order`` (primary clause first).

    Single-key stable sorts are applied from the least significant clause to the
    primary one; each pass keeps the relative order left by the previous pass, so
    the primary clause dominates and later clauses only break its ties. Records
    equal on every clause keep their input order.
    """
    result = list(records)
    for clause in reversed(as_order_clauses(order)):
        # list.sort stays stable with reverse=True, equal keys keep their order.
        result.sort(key=lambda record, field=clause.field: to_text(read_field(record, field)), reverse=clause.desc)
    return result
