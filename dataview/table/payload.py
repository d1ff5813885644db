# File: /dataview/table/payload.py | Version: 1.1 | Title: Embedded base64 payload detection for table cells
from __future__ import annotations

import base64
import binascii
import html
from dataclasses import dataclass
from typing import Any, Optional

MARKER = "base64,"


@dataclass(frozen=True)
class DownloadLink:
    """Display value that stands in for a raw data-URI cell."""

    href: str
    label: str = "Download file"

    @property
    def html(self) -> str:
        return f'<a href="{html.escape(self.href, quote=True)}" download>{html.escape(self.label)}</a>'

    def to_dict(self) -> dict:
        return {"href": self.href, "label": self.label, "html": self.html}


def _payload_segment(value: str) -> Optional[str]:
    parts = value.split(MARKER)
    if len(parts) < 2:
        return None
    return parts[1]


def is_base64_payload(value: Any) -> bool:
    """
    True when `value` carries a "base64," fragment whose payload decodes and
    re-encodes to exactly the same text. Never raises.
    """
    if not isinstance(value, str) or not value:
        return False
    segment = _payload_segment(value)
    if not segment:
        return False
    try:
        decoded = base64.b64decode(segment, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(decoded).decode("ascii") == segment


def substitute_payload(value: Any) -> Any:
    if is_base64_payload(value):
        return DownloadLink(href=value)
    return value
