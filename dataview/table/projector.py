# File: /dataview/table/projector.py | Version: 1.2 | Title: Result projection (column schema + display rows)
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from dataview.schemas.requests import ReadResult, Row
from dataview.table.payload import DownloadLink, substitute_payload

DATA = "data"
SUBVIEW_TOGGLE = "subview_toggle"
ROW_MENU = "row_menu"


@dataclass(frozen=True)
class ColumnSpec:
    name: Optional[str] = None
    prop: Optional[str] = None
    kind: str = DATA
    frozen_left: bool = False
    frozen_right: bool = False
    max_width: Optional[int] = None
    resizeable: bool = True
    sortable: bool = True

    @classmethod
    def data(cls, name: str) -> "ColumnSpec":
        return cls(name=name, prop=name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


SUBVIEW_TOGGLE_COLUMN = ColumnSpec(
    kind=SUBVIEW_TOGGLE, frozen_left=True, max_width=50, resizeable=False, sortable=False
)
ROW_MENU_COLUMN = ColumnSpec(
    kind=ROW_MENU, frozen_right=True, max_width=50, resizeable=False, sortable=False
)


@dataclass
class ProjectedPage:
    columns: List[ColumnSpec] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    count: int = 0

    @property
    def data_columns(self) -> List[str]:
        return [c.prop for c in self.columns if c.kind == DATA and c.prop]


def column_names(result: ReadResult) -> List[str]:
    """Explicit schema when the source sent one, else the first row's keys."""
    if result.columns is not None:
        return list(result.columns)
    if not result.data:
        return []
    return list(result.data[0].keys())


def materialize_rows(data: List[Row]) -> List[Row]:
    return [{k: substitute_payload(v) for k, v in row.items()} for row in data]


def project(result: ReadResult, *, subview: bool = False) -> ProjectedPage:
    columns = [ColumnSpec.data(name) for name in column_names(result)]
    if subview:
        columns.insert(0, SUBVIEW_TOGGLE_COLUMN)
    columns.append(ROW_MENU_COLUMN)
    return ProjectedPage(
        columns=columns, rows=materialize_rows(result.data), count=result.count
    )


def jsonable_row(row: Row) -> Row:
    return {k: (v.to_dict() if isinstance(v, DownloadLink) else v) for k, v in row.items()}
