# File: /dataview/routers/__init__.py | Version: 1.0 | Path: /dataview/routers/__init__.py
"""
Router package exports.
"""
from . import health, view_rows, views

__all__ = ["health", "view_rows", "views"]
