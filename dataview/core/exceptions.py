# File: /dataview/core/exceptions.py | Version: 1.0 | Title: Domain errors for the view table engine
from __future__ import annotations

from typing import Any, Optional


class DataViewError(Exception):
    """Base class for errors raised by the view table engine."""

    status_code: int = 400

    def __init__(self, message: str = "", **context: Any) -> None:
        self.message = message or (self.__doc__ or "").strip()
        super().__init__(self.message)
        self.context = context


class MissingPrimaryKeyError(DataViewError):
    """No primary key column could be determined for this view."""

    status_code = 409

    def __init__(self, table: Optional[str] = None) -> None:
        super().__init__("No primary key column found", table=table)
        self.table = table


class ViewNotFoundError(DataViewError):
    """View not found."""

    status_code = 404

    def __init__(self, view_id: Any) -> None:
        super().__init__("View not found", view_id=view_id)
        self.view_id = view_id


class DataAccessError(DataViewError):
    """The data source rejected or failed a request."""

    status_code = 502
