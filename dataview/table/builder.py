# File: /dataview/table/builder.py | Version: 1.3 | Title: Read/Delete request builder
from __future__ import annotations

import logging
from typing import Any, Optional

from dataview.core.config import settings
from dataview.core.exceptions import MissingPrimaryKeyError
from dataview.schemas.requests import DeleteRequest, PageState, ReadRequest
from dataview.schemas.view import FilterSelection, ViewDescriptor, WhereClause, WhereOperator
from dataview.table.joins import resolve_joins

log = logging.getLogger(__name__)


def effective_search_term(term: Optional[str]) -> Optional[str]:
    """The term as sent to the data source, or None while it is too short."""
    if term is None:
        return None
    term = str(term)
    return term if len(term) >= settings.SEARCH_MIN_LENGTH else None


def build_read_request(
    descriptor: ViewDescriptor,
    page: PageState,
    search_term: Optional[str] = None,
    active_filter: Optional[FilterSelection] = None,
    *,
    initial: bool = False,
) -> ReadRequest:
    """
    Compose a read for the current table state.

    The first load of a view asks only for enabled columns and carries no
    search; every later load (page, limit, search, filter) asks for all
    column names.
    """
    joins = resolve_joins(descriptor.columns)

    if initial:
        req = ReadRequest(
            table=descriptor.table,
            columns=descriptor.enabled_column_names,
            limit=page.limit,
            offset=page.offset,
            joins=joins,
        )
    else:
        req = ReadRequest(
            table=descriptor.table,
            columns=descriptor.column_names,
            limit=page.limit,
            offset=page.offset,
            search_columns=descriptor.searchable_column_names,
            search_term=effective_search_term(search_term),
            where=list(active_filter.where) if active_filter is not None else None,
            joins=joins,
        )

    log.debug("read request for %s: %s", descriptor.table, req.model_dump(exclude_none=True))
    return req


def build_delete_request(
    table: str, primary_key_column: Optional[str], primary_key_value: Any
) -> DeleteRequest:
    if not primary_key_column:
        raise MissingPrimaryKeyError(table)
    return DeleteRequest(
        table=table,
        where=[
            WhereClause(
                column=primary_key_column,
                operator=WhereOperator.eq,
                value=primary_key_value,
                logical_or=False,
            )
        ],
    )
