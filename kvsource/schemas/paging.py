from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional

FILTER_OPS = ("LT", "LTE", "EQ", "GTE", "GT", "CONTAINS")


class FilterClause(BaseModel):
    field: str
    # Checked by the filter engine, so unknown operators surface as InvalidFilterOperation.
    op: str
    value: Any = None


class OrderClause(BaseModel):
    field: str
    desc: bool = False


class PageArgs(BaseModel):
    filter: List[FilterClause] = []
    order: List[OrderClause] = []
    first: Optional[int] = Field(default=None, ge=0)
    last: Optional[int] = Field(default=None, ge=0)
    before: Optional[str] = None
    after: Optional[str] = None

    @field_validator("filter", "order", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("before", "after", mode="before")
    @classmethod
    def _blank_cursor_as_none(cls, value):
        if value is None:
            return None
        return str(value) or None


class _ConnectionModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageInfo(_ConnectionModel):
    has_previous_page: bool = False
    has_next_page: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


class Edge(_ConnectionModel):
    node: Any
    cursor: str


class Page(_ConnectionModel):
    edges: List[Edge] = []
    page_info: PageInfo = PageInfo()
