from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, Union

from kvsource.core.errors import InvalidCursor
from kvsource.schemas.paging import OrderClause
from kvsource.services.ordering import as_order_clauses, sort_key_for
from kvsource.services.coercion import read_field, to_text

_LOG = logging.getLogger("kvsource.cursors")

# A bare record key when no order is in effect, else the stringified ordered field values.
CursorPayload = Union[str, list[str]]


class CursorCodec(Protocol):
    def serialize(self, payload: CursorPayload) -> str:
        ...

    def deserialize(self, token: str) -> CursorPayload:
        ...


class Base64JsonCursorCodec:
    def serialize(self, payload: CursorPayload) -> str:
        raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def deserialize(self, token: str) -> CursorPayload:
        try:
            raw = base64.b64decode(str(token).encode("ascii"), validate=True)
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise InvalidCursor(token) from exc
        if isinstance(payload, str):
            return payload
        if isinstance(payload, list) and all(isinstance(item, str) for item in payload):
            return payload
        raise InvalidCursor(token, "expected a key or a list of field values")


default_codec: CursorCodec = Base64JsonCursorCodec()


def cursor_payload(record: Any, order: list[OrderClause]) -> CursorPayload:
    if order:
        return sort_key_for(record, order)
    return to_text(read_field(record, "key"))


def encode_cursor(
    record: Any,
    order: Iterable[OrderClause | Mapping[str, Any]] | None = None,
    *,
    codec: CursorCodec | None = None,
) -> str:
    return (codec or default_codec).serialize(cursor_payload(record, as_order_clauses(order)))


def decode_cursor(token: str | None, *, codec: CursorCodec | None = None) -> CursorPayload | None:
    if not token:
        return None
    try:
        return (codec or default_codec).deserialize(token)
    except InvalidCursor:
        _LOG.warning("rejected malformed cursor %r", token)
        raise


def cursor_matches(
    record: Any,
    order: Iterable[OrderClause | Mapping[str, Any]] | None,
    decoded: CursorPayload | None,
) -> bool:
    clauses = as_order_clauses(order)
    if not clauses:
        return isinstance(decoded, str) and to_text(read_field(record, "key")) == decoded
    if not isinstance(decoded, list) or len(decoded) != len(clauses):
        return False
    return sort_key_for(record, clauses) == decoded
