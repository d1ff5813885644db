# File: /dataview/schemas/requests.py | Version: 1.2 | Title: Read/Delete request & result schemas for the data-access boundary
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from dataview.schemas._base import BaseSchema
from dataview.schemas.view import JoinSpec, WhereClause

Row = Dict[str, Any]


class PageState(BaseSchema):
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, gt=0)

    @property
    def page_index(self) -> int:
        return self.offset // self.limit


class ReadRequest(BaseSchema):
    table: str
    columns: List[str]
    limit: int = Field(gt=0)
    offset: int = Field(default=0, ge=0)
    search_columns: Optional[List[str]] = None
    search_term: Optional[str] = None
    where: Optional[List[WhereClause]] = None
    joins: List[JoinSpec] = Field(default_factory=list)


class ReadResult(BaseSchema):
    data: List[Row] = Field(default_factory=list)
    # total matching rows, independent of limit/offset
    count: int = 0
    # explicit column schema; None means "infer from the first row"
    columns: Optional[List[str]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DeleteRequest(BaseSchema):
    table: str
    where: List[WhereClause]


class DeleteResult(BaseSchema):
    valid: bool = False
    error: Optional[str] = None
    deleted: int = 0
