# File: /dataview/table/joins.py | Version: 1.0 | Title: Join resolution from referencing columns
from __future__ import annotations

from typing import Iterable, List

from dataview.schemas.view import Column, JoinOn, JoinSpec, WhereOperator


def resolve_joins(columns: Iterable[Column]) -> List[JoinSpec]:
    # One equality join per referencing column, in column order.
    return [
        JoinSpec(
            table=col.ref.table,
            on=JoinOn(
                local=col.name,
                target=col.ref.match_column,
                operator=WhereOperator.eq,
            ),
        )
        for col in columns
        if col.ref is not None
    ]
