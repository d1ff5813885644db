# File: /dataview/table/actions.py | Version: 1.4 | Title: Row / view actions (edit, confirmed delete)
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from dataview.core.config import settings
from dataview.core.exceptions import MissingPrimaryKeyError
from dataview.schemas.requests import DeleteRequest, Row
from dataview.schemas.view import ViewDescriptor
from dataview.table.boundaries import Confirmer, Navigator, ViewCatalog
from dataview.table.builder import build_delete_request
from dataview.table.state import ViewTable

log = logging.getLogger(__name__)

DELETE_ROW = "delete_row"
DELETE_VIEW = "delete_view"


class ActionStatus(str, Enum):
    DONE = "done"
    CANCELLED = "cancelled"
    NO_PRIMARY_KEY = "no_primary_key"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ActionOutcome:
    status: ActionStatus
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ActionStatus.DONE


@dataclass(frozen=True)
class PendingAction:
    """A destructive action awaiting confirmation."""

    kind: str
    view_id: int
    request: Optional[DeleteRequest] = None


def row_menu(descriptor: ViewDescriptor) -> List[Dict[str, Any]]:
    return [
        {"title": "Edit", "icon": "edit-2", "hidden": not descriptor.permissions.update},
        {"title": "Delete", "icon": "trash-2", "hidden": not descriptor.permissions.delete},
    ]


class RowActionDispatcher:
    def __init__(
        self,
        table: ViewTable,
        *,
        navigator: Navigator,
        confirmer: Confirmer,
        catalog: Optional[ViewCatalog] = None,
    ) -> None:
        self.table = table
        self.navigator = navigator
        self.confirmer = confirmer
        self.catalog = catalog

    @property
    def descriptor(self) -> ViewDescriptor:
        return self.table.descriptor

    @property
    def notifier(self):
        return self.table.notifier

    def _no_primary_key(self, row: Optional[Row] = None) -> ActionOutcome:
        pk = self.descriptor.primary_key_column
        if pk and row is not None:
            msg = f"Row has no value for primary key column '{pk}'"
        else:
            msg = f"View '{self.descriptor.name or self.descriptor.table}' has no primary key column"
        self.notifier.warning(msg, "No primary key")
        return ActionOutcome(ActionStatus.NO_PRIMARY_KEY, msg)

    def _row_key(self, row: Row) -> Tuple[str, Any]:
        """(column, value) addressing `row`; raises when the row cannot be addressed."""
        pk = self.descriptor.primary_key_column
        if not pk or row.get(pk) is None:
            # A disabled key column is absent from first-load rows.
            raise MissingPrimaryKeyError(self.descriptor.table)
        return pk, row[pk]

    # --- edit ---
    def edit_row(self, row: Row) -> ActionOutcome:
        try:
            pk, value = self._row_key(row)
        except MissingPrimaryKeyError:
            return self._no_primary_key(row)
        self.navigator.navigate(["/views", self.descriptor.id, "view", "edit", pk, value])
        return ActionOutcome(ActionStatus.DONE)

    # --- two-step protocol: request, then execute ---
    def request_row_delete(self, row: Row) -> PendingAction:
        pk, value = self._row_key(row)
        request = build_delete_request(self.descriptor.table, pk, value)
        return PendingAction(kind=DELETE_ROW, view_id=self.descriptor.id, request=request)

    def request_view_delete(self) -> PendingAction:
        return PendingAction(kind=DELETE_VIEW, view_id=self.descriptor.id)

    async def execute(self, pending: PendingAction) -> ActionOutcome:
        if pending.kind == DELETE_ROW:
            return await self._execute_row_delete(pending)
        if pending.kind == DELETE_VIEW:
            return await self._execute_view_delete(pending)
        raise ValueError(f"Unknown action kind: {pending.kind}")

    # --- confirmed flows ---
    async def delete_row(self, row: Row) -> ActionOutcome:
        try:
            pending = self.request_row_delete(row)
        except MissingPrimaryKeyError:
            return self._no_primary_key(row)
        if not await self.confirmer.confirm(pending):
            return ActionOutcome(ActionStatus.CANCELLED)
        return await self.execute(pending)

    async def delete_view(self) -> ActionOutcome:
        pending = self.request_view_delete()
        if not await self.confirmer.confirm(pending):
            return ActionOutcome(ActionStatus.CANCELLED)
        return await self.execute(pending)

    async def _execute_row_delete(self, pending: PendingAction) -> ActionOutcome:
        result = await self.table.data_access.delete(pending.request)
        if result.error or not result.valid:
            msg = result.error or "Delete failed"
            self.notifier.danger(msg, "Error")
            return ActionOutcome(ActionStatus.FAILED, msg)
        if result.deleted == 0:
            clause = pending.request.where[0]
            msg = f"No row matched {clause.column} = {clause.value}"
            self.notifier.danger(msg, "Error")
            return ActionOutcome(ActionStatus.NOT_FOUND, msg)

        self.notifier.success("Delete completed successfully", "Success")
        await self._reload_after_delete()
        return ActionOutcome(ActionStatus.DONE)

    async def _reload_after_delete(self) -> None:
        table = self.table
        await table.refresh()
        # Last row of the last page went away: step back to the new last page.
        if table.offset > 0 and table.offset >= table.total_elements and table.error is None:
            last_page = max(table.total_elements - 1, 0) // table.limit
            await table.set_page(last_page)

    async def _execute_view_delete(self, pending: PendingAction) -> ActionOutcome:
        if self.catalog is None:
            raise RuntimeError("delete_view requires a view catalog")
        deleted = await self.catalog.delete(pending.view_id)
        if not deleted:
            msg = "View not found"
            self.notifier.danger(msg, "Error")
            return ActionOutcome(ActionStatus.FAILED, msg)

        self.catalog.trigger_changes()
        self.table.close()
        log.info("View %s deleted", pending.view_id)
        self.navigator.navigate([settings.ACCOUNTS_ROUTE])
        return ActionOutcome(ActionStatus.DONE)
