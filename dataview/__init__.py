# File: /dataview/__init__.py | Version: 1.0 | Path: /dataview/__init__.py
