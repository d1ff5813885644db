# File: /dataview/routers/views.py | Version: 1.3 | Title: Stored views (list / get / delete) + saved filters
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dataview.crud.data_access import SqlAlchemyDataAccess
from dataview.crud.view import (
    SqlViewCatalog,
    get_view,
    list_filters,
    list_views as crud_list_views,
    to_descriptor,
    to_filter_selection,
)
from dataview.dependencies import get_catalog, get_data_access, get_db
from dataview.schemas.view import FilterSelection, ViewDescriptor, ViewOut
from dataview.table.actions import ActionStatus, RowActionDispatcher, row_menu
from dataview.table.boundaries import RecordingNavigator, RecordingNotifier, StaticConfirmer
from dataview.table.state import ViewTable

router = APIRouter(prefix="/views", tags=["Views"])


# ----------------------------
# Helpers
# ----------------------------
def load_descriptor(db: Session, view_id: int) -> ViewDescriptor:
    v = get_view(db, view_id)
    if not v:
        raise HTTPException(status_code=404, detail="View not found")
    return to_descriptor(v)


# ----------------------------
# Endpoints
# ----------------------------
@router.get("", response_model=List[ViewOut], summary="List stored views")
def list_views(
    table: Optional[str] = Query(default=None, description="Only views over this table"),
    db: Session = Depends(get_db),
):
    return [
        ViewOut(id=v.id, name=v.name, table=v.table_name, column_count=len(v.columns_json or []))
        for v in crud_list_views(db, table_name=table)
    ]


@router.get("/{view_id}", summary="Get a view descriptor with its row menu")
def get_view_endpoint(view_id: int, db: Session = Depends(get_db)) -> Dict[str, Any]:
    descriptor = load_descriptor(db, view_id)
    return {
        **descriptor.model_dump(mode="json"),
        "primary_key": descriptor.primary_key_column,
        "row_menu": row_menu(descriptor),
    }


@router.get(
    "/{view_id}/filters",
    response_model=List[FilterSelection],
    summary="Saved filters selectable for this view",
)
def list_view_filters(view_id: int, db: Session = Depends(get_db)):
    load_descriptor(db, view_id)
    return [to_filter_selection(f) for f in list_filters(db, view_id)]


@router.delete("/{view_id}", summary="Delete a view definition (requires confirm=true)")
async def delete_view_endpoint(
    view_id: int,
    confirm: bool = Query(default=False),
    db: Session = Depends(get_db),
    data_access: SqlAlchemyDataAccess = Depends(get_data_access),
    catalog: SqlViewCatalog = Depends(get_catalog),
):
    descriptor = load_descriptor(db, view_id)
    navigator = RecordingNavigator()
    dispatcher = RowActionDispatcher(
        ViewTable(descriptor, data_access, notifier=RecordingNotifier()),
        navigator=navigator,
        confirmer=StaticConfirmer(confirm),
        catalog=catalog,
    )
    outcome = await dispatcher.delete_view()
    if outcome.status is ActionStatus.CANCELLED:
        return {"deleted": False, "detail": "Delete not confirmed"}
    if outcome.status is ActionStatus.FAILED:
        raise HTTPException(status_code=404, detail=outcome.message or "View not found")
    return {"deleted": True, "redirect": navigator.current}
