# File: /dataview/dependencies.py | Version: 1.2 | Path: /dataview/dependencies.py
from functools import lru_cache

from dataview.crud.data_access import SqlAlchemyDataAccess
from dataview.crud.view import SqlViewCatalog
from dataview.db.session import SessionLocal, engine, get_db


@lru_cache(maxsize=1)
def get_data_access() -> SqlAlchemyDataAccess:
    return SqlAlchemyDataAccess(engine)


@lru_cache(maxsize=1)
def get_catalog() -> SqlViewCatalog:
    return SqlViewCatalog(SessionLocal)


__all__ = ["get_db", "get_data_access", "get_catalog"]
