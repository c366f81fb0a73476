from __future__ import annotations

from typing import Any

from kvsource.schemas.paging import Edge, OrderClause, Page, PageInfo
from kvsource.services.cursors import CursorCodec, encode_cursor


def build_connection(
    records: list[Any],
    order: list[OrderClause],
    *,
    has_previous_page: bool = False,
    has_next_page: bool = False,
    codec: CursorCodec | None = None,
) -> Page:
    edges = [Edge(node=record, cursor=encode_cursor(record, order, codec=codec)) for record in records]
    return Page(
        edges=edges,
        page_info=PageInfo(
            has_previous_page=has_previous_page,
            has_next_page=has_next_page,
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=edges[-1].cursor if edges else None,
        ),
    )
