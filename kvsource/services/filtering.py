from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from kvsource.core.errors import InvalidFilterOperation
from kvsource.schemas.paging import FILTER_OPS, FilterClause
from kvsource.services.coercion import compare_values, is_sequence, loose_equals, read_field

_LOG = logging.getLogger("kvsource.filtering")

Predicate = Callable[[Any], bool]

_ORDERING_CHECKS: dict[str, Callable[[int], bool]] = {
    "LT": lambda outcome: outcome < 0,
    "LTE": lambda outcome: outcome <= 0,
    "GTE": lambda outcome: outcome >= 0,
    "GT": lambda outcome: outcome > 0,
}


def as_filter_clause(raw: FilterClause | Mapping[str, Any]) -> FilterClause:
    if isinstance(raw, FilterClause):
        return raw
    return FilterClause.model_validate(raw)


def _contains(actual: Any, expected: Any) -> bool:
    if is_sequence(actual) and any(loose_equals(item, expected) for item in actual):
        return True
    # Scalar fields fall back to plain loose equality.
    return loose_equals(actual, expected)


def build_predicate(clause: FilterClause) -> Predicate:
    op = str(clause.op or "").strip().upper()
    field = clause.field
    expected = clause.value

    if op in _ORDERING_CHECKS:
        check = _ORDERING_CHECKS[op]

        def _ordered(record: Any) -> bool:
            outcome = compare_values(read_field(record, field), expected)
            return outcome is not None and check(outcome)

        return _ordered
    if op == "EQ":
        return lambda record: loose_equals(read_field(record, field), expected)
    if op == "CONTAINS":
        return lambda record: _contains(read_field(record, field), expected)

    _LOG.warning("rejected filter field=%s op=%r (known: %s)", field, clause.op, ",".join(FILTER_OPS))
    raise InvalidFilterOperation(clause.op)


def apply_filters(records: Iterable[Any], filters: Iterable[FilterClause | Mapping[str, Any]] | None) -> list[Any]:
    # Resolve every operator first so a bad one fails before any record is scanned.
    predicates = [build_predicate(as_filter_clause(raw)) for raw in (filters or [])]
    result = list(records)
    for predicate in predicates:
        result = [record for record in result if predicate(record)]
    return result
