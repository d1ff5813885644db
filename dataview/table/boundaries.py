# File: /dataview/table/boundaries.py | Version: 1.1 | Title: Collaborator protocols + simple in-process adapters
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Protocol, Sequence, runtime_checkable

from dataview.schemas.requests import DeleteRequest, DeleteResult, ReadRequest, ReadResult

log = logging.getLogger(__name__)


@runtime_checkable
class DataAccess(Protocol):
    async def read(self, request: ReadRequest) -> ReadResult: ...

    async def delete(self, request: DeleteRequest) -> DeleteResult: ...


class Navigator(Protocol):
    def navigate(self, commands: Sequence[Any]) -> None: ...


class Confirmer(Protocol):
    async def confirm(self, action: Any) -> bool: ...


class Notifier(Protocol):
    def success(self, message: str, title: str = "Success") -> None: ...

    def danger(self, message: str, title: str = "Error") -> None: ...

    def warning(self, message: str, title: str = "Warning") -> None: ...


class ViewCatalog(Protocol):
    async def delete(self, view_id: int) -> bool: ...

    def trigger_changes(self) -> None: ...


# ----------------------------
# In-process adapters
# ----------------------------
@dataclass
class Toast:
    severity: str
    message: str
    title: str


@dataclass
class RecordingNotifier:
    """Keeps every toast in order and mirrors it to the log."""

    toasts: List[Toast] = field(default_factory=list)

    def _push(self, severity: str, message: str, title: str) -> None:
        self.toasts.append(Toast(severity=severity, message=message, title=title))
        level = logging.WARNING if severity in ("danger", "warning") else logging.INFO
        log.log(level, "[%s] %s: %s", severity, title, message)

    def success(self, message: str, title: str = "Success") -> None:
        self._push("success", message, title)

    def danger(self, message: str, title: str = "Error") -> None:
        self._push("danger", message, title)

    def warning(self, message: str, title: str = "Warning") -> None:
        self._push("warning", message, title)


@dataclass
class RecordingNavigator:
    history: List[str] = field(default_factory=list)

    def navigate(self, commands: Sequence[Any]) -> None:
        path = "/".join(str(c).strip("/") for c in commands)
        self.history.append("/" + path)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None


@dataclass
class StaticConfirmer:
    """Answers every confirmation with a fixed value (HTTP callers pass ?confirm=)."""

    answer: bool = False

    async def confirm(self, action: Any) -> bool:
        return self.answer
