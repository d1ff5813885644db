# File: /tests/test_query_builder.py | Title: Join resolution + read/delete request building
import pytest

from dataview.core.exceptions import MissingPrimaryKeyError
from dataview.schemas.requests import PageState
from dataview.schemas.view import FilterSelection, WhereClause, WhereOperator
from dataview.table.builder import build_delete_request, build_read_request
from dataview.table.joins import resolve_joins


def test_resolve_joins_one_per_referencing_column(joined_descriptor):
    joins = resolve_joins(joined_descriptor.columns)

    referencing = [c for c in joined_descriptor.columns if c.ref is not None]
    assert len(joins) == len(referencing) == 2
    for join, col in zip(joins, referencing):
        assert join.table == col.ref.table
        assert join.on.local == col.name
        assert join.on.target == col.ref.match_column
        assert join.on.operator == WhereOperator.eq


def test_resolve_joins_empty_without_refs(descriptor):
    assert resolve_joins(descriptor.columns) == []


def test_initial_read_request_matches_first_load(descriptor):
    req = build_read_request(descriptor, PageState(offset=0, limit=10), initial=True)

    assert req.table == "accounts"
    assert req.columns == ["id", "email"]
    assert req.limit == 10
    assert req.offset == 0
    assert req.joins == []
    assert req.search_columns is None
    assert req.search_term is None
    assert req.where is None


def test_initial_load_uses_enabled_columns_later_loads_use_all(joined_descriptor):
    page = PageState(offset=0, limit=5)
    first = build_read_request(joined_descriptor, page, initial=True)
    later = build_read_request(joined_descriptor, page)

    assert first.columns == ["id", "customer_id", "product_code"]
    assert later.columns == ["id", "customer_id", "product_code", "memo"]
    assert later.search_columns == ["memo"]
    assert len(first.joins) == len(later.joins) == 2


@pytest.mark.parametrize("term", ["", "b", None])
def test_short_search_terms_are_never_sent(descriptor, term):
    req = build_read_request(descriptor, PageState(limit=10), term)
    assert req.search_term is None
    # searchable columns still go out on every non-initial read
    assert req.search_columns == ["email"]


@pytest.mark.parametrize("term", ["bo", "bob", "  x "])
def test_search_terms_of_two_or_more_chars_are_sent_unchanged(descriptor, term):
    req = build_read_request(descriptor, PageState(limit=10), term)
    assert req.search_term == term


def test_filter_clauses_are_attached(descriptor):
    selection = FilterSelection(
        name="Example domain",
        where=[
            WhereClause(column="email", operator=WhereOperator.contains, value="example"),
            WhereClause(column="id", operator=WhereOperator.eq, value=3, logical_or=True),
        ],
    )
    req = build_read_request(descriptor, PageState(offset=20, limit=10), "bob", selection)

    assert [w.column for w in req.where] == ["email", "id"]
    assert req.where[1].logical_or is True
    assert req.offset == 20
    assert req.search_term == "bob"


def test_delete_request_single_equality_clause():
    req = build_delete_request("accounts", "id", 42)

    assert req.table == "accounts"
    assert len(req.where) == 1
    clause = req.where[0]
    assert clause.column == "id"
    assert clause.operator == WhereOperator.eq
    assert clause.value == 42
    assert clause.logical_or is False


def test_delete_request_without_primary_key_fails():
    with pytest.raises(MissingPrimaryKeyError) as excinfo:
        build_delete_request("accounts", None, 42)
    assert excinfo.value.table == "accounts"
    assert excinfo.value.status_code == 409
