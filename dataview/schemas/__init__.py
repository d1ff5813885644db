# File: /dataview/schemas/__init__.py | Version: 1.0 | Path: /dataview/schemas/__init__.py
from . import requests, view

__all__ = ["requests", "view"]
