# File: /tests/test_views_router.py | Title: /views endpoints (list, get, filters, delete)
from sqlalchemy import select

from dataview.models.view import ViewRecord


def test_list_views(client, accounts_view):
    r = client.get("/views")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body == [{"id": accounts_view.id, "name": "Accounts", "table": "accounts", "column_count": 6}]

    r2 = client.get("/views", params={"table": "orders"})
    assert r2.json() == []


def test_get_view_descriptor_with_menu(client, accounts_view):
    r = client.get(f"/views/{accounts_view.id}")
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["table"] == "accounts"
    assert body["primary_key"] == "id"
    assert [c["name"] for c in body["columns"]][:2] == ["id", "email"]
    assert body["columns"][3]["ref"] == {"table": "companies", "match_column": "id"}
    assert body["permissions"]["export"] is False
    assert [m["hidden"] for m in body["row_menu"]] == [False, False]


def test_get_missing_view_is_404(client):
    r = client.get("/views/999")
    assert r.status_code == 404
    assert r.json()["detail"] == "View not found"


def test_list_filters(client, accounts_view):
    r = client.get(f"/views/{accounts_view.id}/filters")
    assert r.status_code == 200, r.text
    filters = r.json()
    assert len(filters) == 1
    assert filters[0]["name"] == "Acme only"
    assert filters[0]["where"] == [
        {"column": "company_id", "operator": "eq", "value": 1, "logical_or": False}
    ]


def test_delete_view_requires_confirmation(client, accounts_view, session_factory):
    r = client.delete(f"/views/{accounts_view.id}")
    assert r.status_code == 200
    assert r.json()["deleted"] is False

    r2 = client.delete(f"/views/{accounts_view.id}", params={"confirm": "true"})
    assert r2.status_code == 200, r2.text
    assert r2.json() == {"deleted": True, "redirect": "/accounts"}

    with session_factory() as s:
        assert s.execute(select(ViewRecord).where(ViewRecord.id == accounts_view.id)).first() is None


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_readyz_reports_both_sides(client):
    r = client.get("/readyz")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ok", "db": "ok", "source": "ok"}


def test_readyz_degraded_when_source_unreachable(client, tmp_path):
    from sqlalchemy import create_engine

    from dataview.crud.data_access import SqlAlchemyDataAccess
    from dataview.dependencies import get_data_access
    from dataview.main import app

    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nope.db'}")
    app.dependency_overrides[get_data_access] = lambda: SqlAlchemyDataAccess(broken)

    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"status": "degraded", "db": "ok", "source": "error"}


def test_get_view_with_numeric_key_marker(client, db_session, accounts_view):
    columns = [dict(c) for c in accounts_view.columns_json]
    columns[0]["key"] = 1
    accounts_view.columns_json = columns
    db_session.commit()

    r = client.get(f"/views/{accounts_view.id}")
    assert r.status_code == 200, r.text
    assert r.json()["primary_key"] == "id"
