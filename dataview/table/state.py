# File: /dataview/table/state.py | Version: 2.1 | Title: Pagination / search / filter state machine for a view table
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from dataview.core.config import settings
from dataview.core.exceptions import DataAccessError
from dataview.schemas.requests import PageState, ReadRequest, ReadResult, Row
from dataview.schemas.view import FilterSelection, ViewDescriptor
from dataview.table.boundaries import DataAccess, Notifier, RecordingNotifier
from dataview.table.builder import build_read_request
from dataview.table.projector import ColumnSpec, project

log = logging.getLogger(__name__)


# ----------------------
# Search state
# ----------------------
@dataclass(frozen=True)
class NoSearch:
    term: str = ""


@dataclass(frozen=True)
class PendingSearch:
    """Typed, but too short to be sent."""

    term: str


@dataclass(frozen=True)
class ActiveSearch:
    term: str


SearchState = Union[NoSearch, PendingSearch, ActiveSearch]


def search_state_for(term: Optional[str]) -> SearchState:
    term = "" if term is None else str(term)
    if not term:
        return NoSearch()
    if len(term) < settings.SEARCH_MIN_LENGTH:
        return PendingSearch(term)
    return ActiveSearch(term)


# ----------------------
# Table
# ----------------------
class ViewTable:
    """
    Owns page/limit, search and filter state for one view and keeps
    `rows`, `columns` and `total_elements` in sync with the data source.

    Every transition builds a fresh read request. Reads are tagged with a
    sequence number; a response that is no longer the latest one is dropped,
    so overlapping transitions always settle on the newest request.
    """

    def __init__(
        self,
        descriptor: ViewDescriptor,
        data_access: DataAccess,
        *,
        notifier: Optional[Notifier] = None,
        limit: Optional[int] = None,
        loading_min_seconds: Optional[float] = None,
        page_loading_min_seconds: Optional[float] = None,
    ) -> None:
        self.descriptor = descriptor
        self.data_access = data_access
        self.notifier = notifier if notifier is not None else RecordingNotifier()

        self.page = PageState(offset=0, limit=limit or settings.DEFAULT_PAGE_LIMIT)
        self.search_state: SearchState = NoSearch()
        self.active_filter: Optional[FilterSelection] = None

        self.rows: List[Row] = []
        self.columns: List[ColumnSpec] = []
        self.total_elements: int = 0
        self.error: Optional[str] = None
        self.is_loading: bool = False
        self.last_request: Optional[ReadRequest] = None

        self.loading_min_seconds = (
            settings.LOADING_MIN_SECONDS if loading_min_seconds is None else loading_min_seconds
        )
        self.page_loading_min_seconds = (
            settings.PAGE_LOADING_MIN_SECONDS
            if page_loading_min_seconds is None
            else page_loading_min_seconds
        )

        self._seq = 0
        self._applied_seq = 0
        self._closed = False

    # --- read-only views of the state ---
    @property
    def offset(self) -> int:
        return self.page.offset

    @property
    def limit(self) -> int:
        return self.page.limit

    @property
    def page_index(self) -> int:
        return self.page.page_index

    @property
    def show_search_clear(self) -> bool:
        return len(self.search_state.term) > 1

    @property
    def applied_sequence(self) -> int:
        return self._applied_seq

    # --- transitions ---
    async def load(self) -> bool:
        """First load of the view: enabled columns, first page, no search."""
        self.page = PageState(offset=0, limit=self.page.limit)
        return await self._fetch(initial=True, min_seconds=self.loading_min_seconds)

    async def select_limit(self, limit: int) -> bool:
        self.page = PageState(offset=0, limit=int(limit))
        return await self.set_page(0)

    async def set_page(self, page_index: int, page_size: Optional[int] = None) -> bool:
        size = int(page_size) if page_size else self.page.limit
        self.page = PageState(offset=int(page_index) * size, limit=self.page.limit)
        return await self._fetch(initial=False, min_seconds=self.page_loading_min_seconds)

    async def select_filter(self, selection: FilterSelection) -> bool:
        self.active_filter = selection
        return await self.select_limit(self.page.limit)

    async def deselect_filter(self) -> bool:
        self.active_filter = None
        return await self.select_limit(self.page.limit)

    async def search(self, term: Optional[str]) -> bool:
        """
        Apply typed search text. An empty term resets the table, a term that
        is still too short is kept as pending without fetching.
        Returns True when a read was applied.
        """
        self.search_state = search_state_for(term)
        if isinstance(self.search_state, PendingSearch):
            return False
        return await self.select_limit(self.page.limit)

    async def clear_search(self) -> bool:
        self.search_state = NoSearch()
        return await self.select_limit(self.page.limit)

    async def refresh(self) -> bool:
        """Re-read the current page with the current search/filter state."""
        return await self._fetch(initial=False, min_seconds=self.page_loading_min_seconds)

    def restore(
        self,
        *,
        page_index: int = 0,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        active_filter: Optional[FilterSelection] = None,
    ) -> None:
        """Seed state without fetching (used when rebuilding a table per request)."""
        size = int(limit) if limit else self.page.limit
        self.page = PageState(offset=int(page_index) * size, limit=size)
        self.search_state = search_state_for(search)
        self.active_filter = active_filter

    def close(self) -> None:
        # Reads still in flight are discarded when they land.
        self._closed = True
        self.is_loading = False

    # --- fetch + reconcile ---
    async def _fetch(self, *, initial: bool, min_seconds: float) -> bool:
        self._seq += 1
        seq = self._seq

        request = build_read_request(
            self.descriptor,
            self.page,
            self.search_state.term,
            self.active_filter,
            initial=initial,
        )
        self.last_request = request
        self.is_loading = True

        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            result = await self.data_access.read(request)
        except DataAccessError as exc:
            result = ReadResult(error=exc.message)

        if self._closed:
            self.is_loading = False
            log.debug("Discarding read #%s for closed table %s", seq, self.descriptor.table)
            return False
        if seq != self._seq:
            log.debug("Discarding stale read #%s for %s (latest #%s)", seq, self.descriptor.table, self._seq)
            return False

        if result.ok:
            self._apply(seq, result)
        else:
            self._apply_error(seq, result.error or "Read failed")

        remaining = min_seconds - (loop.time() - started)
        if remaining > 0:
            await asyncio.sleep(remaining)
        if seq == self._seq:
            self.is_loading = False
        return result.ok

    def _apply(self, seq: int, result: ReadResult) -> None:
        projected = project(result, subview=self.descriptor.has_subview)
        self.columns = projected.columns
        self.rows = projected.rows
        self.total_elements = result.count
        self.error = None
        self._applied_seq = seq

    def _apply_error(self, seq: int, message: str) -> None:
        log.warning("Read failed for view %s (%s): %s", self.descriptor.id, self.descriptor.table, message)
        self.columns = []
        self.rows = []
        self.total_elements = 0
        self.error = message
        self._applied_seq = seq
        self.notifier.danger(message, "Error")
