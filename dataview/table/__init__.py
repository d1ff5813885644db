# File: /dataview/table/__init__.py | Version: 1.1 | Title: View table engine exports
"""
Request building and state reconciliation for a schema-driven data table.

The engine never talks to a database or a UI directly; it goes through the
collaborator protocols in ``dataview.table.boundaries``.
"""
from .actions import ActionOutcome, ActionStatus, PendingAction, RowActionDispatcher, row_menu
from .builder import build_delete_request, build_read_request
from .joins import resolve_joins
from .payload import DownloadLink, is_base64_payload
from .projector import ColumnSpec, ProjectedPage, project
from .state import ActiveSearch, NoSearch, PendingSearch, ViewTable, search_state_for

__all__ = [
    "ActionOutcome",
    "ActionStatus",
    "ActiveSearch",
    "ColumnSpec",
    "DownloadLink",
    "NoSearch",
    "PendingAction",
    "PendingSearch",
    "ProjectedPage",
    "RowActionDispatcher",
    "ViewTable",
    "build_delete_request",
    "build_read_request",
    "is_base64_payload",
    "project",
    "resolve_joins",
    "row_menu",
    "search_state_for",
]
