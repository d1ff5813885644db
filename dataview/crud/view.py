# File: /dataview/crud/view.py | Version: 1.3 | Title: CRUD helpers for stored views + catalog adapter
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from dataview.models.view import ViewFilterRecord, ViewRecord
from dataview.schemas.view import (
    Column,
    FilterSelection,
    Permissions,
    Subview,
    ViewDescriptor,
    WhereClause,
)

log = logging.getLogger(__name__)


def get_view(db: Session, view_id: int) -> Optional[ViewRecord]:
    return db.get(ViewRecord, view_id)


def list_views(db: Session, table_name: Optional[str] = None) -> List[ViewRecord]:
    q = db.query(ViewRecord)
    if table_name:
        q = q.filter(ViewRecord.table_name == table_name)
    return q.order_by(ViewRecord.name.asc(), ViewRecord.id.asc()).all()


def delete_view(db: Session, v: ViewRecord) -> bool:
    db.delete(v)
    db.commit()
    return True


def list_filters(db: Session, view_id: int) -> List[ViewFilterRecord]:
    return (
        db.query(ViewFilterRecord)
        .filter(ViewFilterRecord.view_id == view_id)
        .order_by(ViewFilterRecord.name.asc())
        .all()
    )


def get_filter(db: Session, view_id: int, filter_id: int) -> Optional[ViewFilterRecord]:
    return (
        db.query(ViewFilterRecord)
        .filter(ViewFilterRecord.view_id == view_id, ViewFilterRecord.id == filter_id)
        .first()
    )


# -------- record -> schema --------

def to_descriptor(v: ViewRecord) -> ViewDescriptor:
    return ViewDescriptor(
        id=v.id,
        name=v.name,
        table=v.table_name,
        columns=[Column.model_validate(c) for c in (v.columns_json or [])],
        permissions=Permissions.model_validate(v.permissions_json or {}),
        subview=Subview.model_validate(v.subview_json) if v.subview_json else None,
    )


def to_filter_selection(f: ViewFilterRecord) -> FilterSelection:
    return FilterSelection(
        id=f.id,
        name=f.name,
        where=[WhereClause.model_validate(w) for w in (f.where_json or [])],
    )


# -------- catalog (view list owned by the hosting session) --------

class SqlViewCatalog:
    """
    Deletes stored views and tells subscribers the view list is stale.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory
        self.stale = False
        self._listeners: List[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _delete_sync(self, view_id: int) -> bool:
        with self.session_factory() as db:
            v = get_view(db, view_id)
            if v is None:
                return False
            return delete_view(db, v)

    async def delete(self, view_id: int) -> bool:
        return await run_in_threadpool(self._delete_sync, view_id)

    def trigger_changes(self) -> None:
        self.stale = True
        for listener in list(self._listeners):
            listener()
        log.debug("View catalog marked stale (%d listener(s))", len(self._listeners))
