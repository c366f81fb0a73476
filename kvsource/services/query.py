from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from kvsource.schemas.paging import Page, PageArgs
from kvsource.services.connection import build_connection
from kvsource.services.cursors import CursorCodec, decode_cursor
from kvsource.services.filtering import apply_filters
from kvsource.services.ordering import apply_order
from kvsource.services.window import select_window
from kvsource.services.record_store import RecordStore

_LOG = logging.getLogger("kvsource.query")


def _as_page_args(args: PageArgs | Mapping[str, Any] | None) -> PageArgs:
    if args is None:
        return PageArgs()
    if isinstance(args, PageArgs):
        return args
    return PageArgs.model_validate(args)


def query(
    records: Iterable[Any],
    args: PageArgs | Mapping[str, Any] | None = None,
    *,
    codec: CursorCodec | None = None,
) -> Page:
    page_args = _as_page_args(args)
    # Decode up front: a malformed cursor must fail before any work is done.
    after = decode_cursor(page_args.after, codec=codec)
    before = decode_cursor(page_args.before, codec=codec)

    snapshot = list(records)
    filtered = apply_filters(snapshot, page_args.filter)
    ordered = apply_order(filtered, page_args.order)
    window = select_window(
        ordered,
        page_args.order,
        first=page_args.first,
        last=page_args.last,
        before=before,
        after=after,
    )
    _LOG.debug(
        "query scanned=%s filtered=%s returned=%s has_previous=%s has_next=%s",
        len(snapshot),
        len(filtered),
        len(window.records),
        window.has_previous_page,
        window.has_next_page,
    )
    return build_connection(
        window.records,
        page_args.order,
        has_previous_page=window.has_previous_page,
        has_next_page=window.has_next_page,
        codec=codec,
    )


def query_store(
    store: RecordStore,
    args: PageArgs | Mapping[str, Any] | None = None,
    *,
    codec: CursorCodec | None = None,
) -> Page:
    return query(store.list_all(), args, codec=codec)
