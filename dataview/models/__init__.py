# File: /dataview/models/__init__.py | Version: 1.0 | Title: Models Package Exports
from .view import ViewFilterRecord, ViewRecord

__all__ = ["ViewRecord", "ViewFilterRecord"]
