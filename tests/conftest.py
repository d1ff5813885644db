# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "dataview"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, insert
from sqlalchemy.orm import sessionmaker

from dataview.crud.data_access import SqlAlchemyDataAccess
from dataview.crud.view import SqlViewCatalog
from dataview.db import Base, make_engine
from dataview.models.view import ViewFilterRecord, ViewRecord
from dataview.schemas.requests import DeleteRequest, DeleteResult, ReadRequest, ReadResult
from dataview.schemas.view import Column as ViewColumn
from dataview.schemas.view import ColumnRef, Permissions, Subview, ViewDescriptor

# ----------------------------
# Source tables the views read from
# ----------------------------
source_metadata = MetaData()

companies = Table(
    "companies",
    source_metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False),
)

accounts = Table(
    "accounts",
    source_metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("name", String(100)),
    Column("company_id", Integer, ForeignKey("companies.id")),
    Column("avatar", String),
    Column("notes", String),
)

ACCOUNT_COUNT = 25
AVATAR = "data:image/png;base64,QUJD"


def _account_rows() -> List[Dict[str, Any]]:
    rows = []
    for i in range(1, ACCOUNT_COUNT + 1):
        rows.append(
            {
                "id": i,
                "email": "bob@example.com" if i == 7 else f"user{i:02d}@example.com",
                "name": "Bob" if i == 7 else f"User {i}",
                "company_id": 1 if i % 2 else 2,
                "avatar": AVATAR if i == 3 else None,
                "notes": f"note {i}",
            }
        )
    return rows


ACCOUNTS_COLUMNS = [
    {"name": "id", "enabled": True, "searchable": False, "key": "PRI"},
    {"name": "email", "enabled": True, "searchable": True},
    {"name": "name", "enabled": True, "searchable": True},
    {
        "name": "company_id",
        "enabled": True,
        "ref": {"table": "companies", "match_column": "id"},
    },
    {"name": "avatar", "enabled": True},
    {"name": "notes", "enabled": False},
]


@pytest.fixture()
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=eng)
    source_metadata.create_all(bind=eng)
    with eng.begin() as conn:
        conn.execute(insert(companies), [{"id": 1, "name": "Acme"}, {"id": 2, "name": "Globex"}])
        conn.execute(insert(accounts), _account_rows())
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def accounts_view(db_session) -> ViewRecord:
    v = ViewRecord(
        name="Accounts",
        table_name="accounts",
        columns_json=ACCOUNTS_COLUMNS,
        permissions_json={"update": True, "delete": True, "export": False},
        subview_json={"enabled": False},
    )
    db_session.add(v)
    db_session.flush()
    db_session.add(
        ViewFilterRecord(
            view_id=v.id,
            name="Acme only",
            where_json=[{"column": "company_id", "operator": "eq", "value": 1}],
        )
    )
    db_session.commit()
    db_session.refresh(v)
    return v


@pytest.fixture()
def data_access(engine) -> SqlAlchemyDataAccess:
    return SqlAlchemyDataAccess(engine)


@pytest.fixture()
def client(db_session, data_access, session_factory):
    from dataview.db.session import get_db  # late import to avoid circulars
    from dataview.dependencies import get_catalog, get_data_access
    from dataview.main import app

    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_data_access] = lambda: data_access
    app.dependency_overrides[get_catalog] = lambda: SqlViewCatalog(session_factory)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ----------------------------
# In-memory collaborators for engine-level tests
# ----------------------------
class FakeDataAccess:
    """Serves slices of `rows`; records every request it sees."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, columns: Optional[List[str]] = None):
        self.rows = list(rows or [])
        self.columns = columns
        self.requests: List[ReadRequest] = []
        self.deletes: List[DeleteRequest] = []
        self.read_error: Optional[str] = None
        self.delete_error: Optional[str] = None

    @property
    def last(self) -> ReadRequest:
        return self.requests[-1]

    async def read(self, request: ReadRequest) -> ReadResult:
        self.requests.append(request)
        if self.read_error:
            return ReadResult(error=self.read_error)
        page = self.rows[request.offset : request.offset + request.limit]
        return ReadResult(data=[dict(r) for r in page], count=len(self.rows), columns=self.columns)

    async def delete(self, request: DeleteRequest) -> DeleteResult:
        self.deletes.append(request)
        if self.delete_error:
            return DeleteResult(valid=False, error=self.delete_error)
        clause = request.where[0]
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.get(clause.column) != clause.value]
        return DeleteResult(valid=True, deleted=before - len(self.rows))


@pytest.fixture()
def make_access():
    return FakeDataAccess


@pytest.fixture()
def descriptor() -> ViewDescriptor:
    return ViewDescriptor(
        id=1,
        name="Accounts",
        table="accounts",
        columns=[
            ViewColumn(name="id", key="PRI"),
            ViewColumn(name="email", searchable=True),
        ],
        permissions=Permissions(update=True, delete=True),
    )


@pytest.fixture()
def joined_descriptor() -> ViewDescriptor:
    return ViewDescriptor(
        id=2,
        name="Orders",
        table="orders",
        columns=[
            ViewColumn(name="id", key="1"),
            ViewColumn(name="customer_id", ref=ColumnRef(table="customers", match_column="id")),
            ViewColumn(name="product_code", ref=ColumnRef(table="products", match_column="code")),
            ViewColumn(name="memo", enabled=False, searchable=True),
        ],
        subview=Subview(enabled=True),
    )
