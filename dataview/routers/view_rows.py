# File: /dataview/routers/view_rows.py | Version: 1.2 | Title: Paged rows for a view + row delete
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dataview.core.config import settings
from dataview.crud.data_access import SqlAlchemyDataAccess
from dataview.crud.view import get_filter, to_filter_selection
from dataview.dependencies import get_data_access, get_db
from dataview.routers.views import load_descriptor
from dataview.schemas.view import FilterSelection
from dataview.table.actions import ActionStatus, RowActionDispatcher
from dataview.table.boundaries import RecordingNavigator, RecordingNotifier, StaticConfirmer
from dataview.table.projector import jsonable_row
from dataview.table.state import ViewTable

router = APIRouter(prefix="/views", tags=["View rows"])


def _page_payload(table: ViewTable) -> Dict[str, Any]:
    return {
        "count": table.total_elements,
        "offset": table.offset,
        "limit": table.limit,
        "columns": [c.to_dict() for c in table.columns],
        "rows": [jsonable_row(r) for r in table.rows],
    }


def _table(descriptor, data_access, **kwargs) -> ViewTable:
    # HTTP callers get the response as soon as it is ready.
    return ViewTable(
        descriptor,
        data_access,
        loading_min_seconds=0,
        page_loading_min_seconds=0,
        **kwargs,
    )


@router.get("/{view_id}/rows", summary="Read one page of a view")
async def read_rows(
    view_id: int,
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    search: Optional[str] = Query(default=None),
    filter_id: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
    data_access: SqlAlchemyDataAccess = Depends(get_data_access),
):
    descriptor = load_descriptor(db, view_id)

    selection: Optional[FilterSelection] = None
    if filter_id is not None:
        f = get_filter(db, view_id, filter_id)
        if not f:
            raise HTTPException(status_code=404, detail="Filter not found")
        selection = to_filter_selection(f)

    table = _table(descriptor, data_access, limit=limit)
    if page == 0 and not search and selection is None:
        # untouched table: first-load semantics
        await table.load()
    else:
        table.restore(page_index=page, limit=limit, search=search, active_filter=selection)
        await table.refresh()

    if table.error:
        raise HTTPException(status_code=502, detail=table.error)
    return _page_payload(table)


@router.delete("/{view_id}/rows/{pk_value}", summary="Delete one row by primary key")
async def delete_row(
    view_id: int,
    pk_value: str,
    confirm: bool = Query(default=False),
    db: Session = Depends(get_db),
    data_access: SqlAlchemyDataAccess = Depends(get_data_access),
):
    descriptor = load_descriptor(db, view_id)
    if not descriptor.permissions.delete:
        raise HTTPException(status_code=403, detail="Deleting rows is not permitted for this view")

    notifier = RecordingNotifier()
    table = _table(descriptor, data_access, notifier=notifier)
    dispatcher = RowActionDispatcher(
        table, navigator=RecordingNavigator(), confirmer=StaticConfirmer(confirm)
    )
    pk = descriptor.primary_key_column
    outcome = await dispatcher.delete_row({pk: pk_value} if pk else {})

    if outcome.status is ActionStatus.NO_PRIMARY_KEY:
        raise HTTPException(status_code=409, detail=outcome.message)
    if outcome.status is ActionStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail=outcome.message)
    if outcome.status is ActionStatus.FAILED:
        raise HTTPException(status_code=502, detail=outcome.message)
    if outcome.status is ActionStatus.CANCELLED:
        return {"deleted": False, "detail": "Delete not confirmed"}
    return {
        "deleted": True,
        "count": table.total_elements,
        "notifications": [t.message for t in notifier.toasts],
    }
