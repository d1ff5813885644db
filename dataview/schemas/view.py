# File: /dataview/schemas/view.py | Version: 1.4 | Title: View descriptor, filter and join schemas
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import ConfigDict, Field, field_validator

from dataview.schemas._base import BaseSchema

# Values a column's `key` may carry to mark it as the primary key
PRIMARY_KEY_MARKERS = ("PRI", "1")


class WhereOperator(str, Enum):
    eq = "eq"
    ne = "ne"
    lt = "lt"
    lte = "lte"
    gt = "gt"
    gte = "gte"
    contains = "contains"
    in_ = "in"
    not_in = "not_in"
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"


class ColumnRef(BaseSchema):
    table: str
    match_column: str


class Column(BaseSchema):
    name: str
    enabled: bool = True
    searchable: bool = False
    key: Optional[str] = None
    ref: Optional[ColumnRef] = None

    @field_validator("key", mode="before")
    @classmethod
    def _key_as_text(cls, v):
        # Stored descriptors mark keys with "PRI", "1" or a bare 1.
        return None if v is None else str(v)

    @property
    def is_primary_key(self) -> bool:
        return self.key in PRIMARY_KEY_MARKERS


class Permissions(BaseSchema):
    # Stored permission blobs carry more flags than update/delete; keep them.
    model_config = ConfigDict(extra="allow")

    update: bool = False
    delete: bool = False


class Subview(BaseSchema):
    enabled: bool = False


class ViewDescriptor(BaseSchema):
    id: int
    name: Optional[str] = None
    table: str
    columns: List[Column] = Field(default_factory=list)
    permissions: Permissions = Field(default_factory=Permissions)
    subview: Optional[Subview] = None

    @property
    def primary_key_column(self) -> Optional[str]:
        """Name of the first column marked as primary key, or None."""
        for col in self.columns:
            if col.is_primary_key:
                return col.name
        return None

    @property
    def has_subview(self) -> bool:
        return bool(self.subview and self.subview.enabled)

    @property
    def enabled_column_names(self) -> List[str]:
        return [c.name for c in self.columns if c.enabled]

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def searchable_column_names(self) -> List[str]:
        return [c.name for c in self.columns if c.searchable]


class WhereClause(BaseSchema):
    column: str
    operator: WhereOperator = WhereOperator.eq
    # Raw value as the data source returns it (UUID and date keys included).
    value: Any = None
    logical_or: bool = False


class FilterSelection(BaseSchema):
    id: Optional[int] = None
    name: Optional[str] = None
    where: List[WhereClause] = Field(default_factory=list)


class JoinOn(BaseSchema):
    local: str
    target: str
    operator: WhereOperator = WhereOperator.eq


class JoinSpec(BaseSchema):
    table: str
    on: JoinOn


class ViewOut(BaseSchema):
    """Listing row for a stored view."""

    id: int
    name: str
    table: str
    column_count: int
