# File: /dataview/crud/data_access.py | Version: 1.3 | Title: SQLAlchemy-backed data access for view tables
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import (
    MetaData,
    String,
    Table,
    and_,
    cast,
    delete,
    func,
    not_,
    or_,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from dataview.core.exceptions import DataAccessError
from dataview.schemas.requests import DeleteRequest, DeleteResult, ReadRequest, ReadResult
from dataview.schemas.view import WhereClause, WhereOperator

log = logging.getLogger(__name__)


# ----------------------
# Expression helpers
# ----------------------
def _compare(col, op: WhereOperator, val: Any):
    if op == WhereOperator.eq:
        return col == val
    if op == WhereOperator.ne:
        return col != val
    if op == WhereOperator.lt:
        return col < val
    if op == WhereOperator.lte:
        return col <= val
    if op == WhereOperator.gt:
        return col > val
    if op == WhereOperator.gte:
        return col >= val
    if op == WhereOperator.contains:
        return func.lower(cast(col, String)).contains(str(val).lower())
    if op == WhereOperator.in_:
        return col.in_(val if isinstance(val, list) else [val])
    if op == WhereOperator.not_in:
        return not_(col.in_(val if isinstance(val, list) else [val]))
    if op == WhereOperator.is_empty:
        return or_(col.is_(None), cast(col, String) == "")
    if op == WhereOperator.is_not_empty:
        return and_(col.is_not(None), cast(col, String) != "")
    raise DataAccessError(f"Unsupported operator: {op}")


def _coerce(col, val: Any) -> Any:
    # Keys arriving from URLs are strings; match them to numeric columns.
    if not isinstance(val, str):
        return val
    try:
        python_type = col.type.python_type
    except NotImplementedError:
        return val
    if python_type in (int, float):
        try:
            return python_type(val)
        except ValueError:
            return val
    return val


def _clause_expr(col, clause: WhereClause):
    val = clause.value
    if isinstance(val, list):
        val = [_coerce(col, v) for v in val]
    else:
        val = _coerce(col, val)
    return _compare(col, clause.operator, val)


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _combine(exprs_with_or: Sequence[tuple]):
    """
    Fold clauses left to right: each clause joins what came before with OR
    when its `logical_or` flag is set, AND otherwise.
    """
    combined = None
    for expr, use_or in exprs_with_or:
        if combined is None:
            combined = expr
        elif use_or:
            combined = or_(combined, expr)
        else:
            combined = and_(combined, expr)
    return combined


class SqlAlchemyDataAccess:
    """
    Executes view read/delete requests against tables reflected from `engine`.

    Blocking database work runs in Starlette's threadpool; failures come back
    as `ReadResult.error` / `DeleteResult.error`, never as exceptions.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.metadata = MetaData()
        self._tables: Dict[str, Table] = {}

    # --- reflection ---
    def _table(self, name: str) -> Table:
        tbl = self._tables.get(name)
        if tbl is None:
            try:
                tbl = Table(name, self.metadata, autoload_with=self.engine)
            except NoSuchTableError as exc:
                raise DataAccessError(f"Unknown table: {name}") from exc
            self._tables[name] = tbl
        return tbl

    @staticmethod
    def _column(tbl: Table, name: str):
        try:
            return tbl.c[name]
        except KeyError as exc:
            raise DataAccessError(f"Unknown column: {tbl.name}.{name}") from exc

    def _where(self, tbl: Table, clauses: Optional[List[WhereClause]]):
        if not clauses:
            return None
        return _combine(
            [(_clause_expr(self._column(tbl, c.column), c), c.logical_or) for c in clauses]
        )

    # --- read ---
    def _build_select(self, request: ReadRequest):
        tbl = self._table(request.table)
        selected = [self._column(tbl, name) for name in request.columns]
        source = tbl

        repeated = Counter(join.table for join in request.joins)
        for join in request.joins:
            target = self._table(join.table)
            if repeated[join.table] > 1 or join.table == tbl.name:
                # Same table reached through several columns: one alias per column.
                target = target.alias(f"{join.table}_{join.on.local}")
            on = _compare(
                self._column(tbl, join.on.local),
                join.on.operator,
                self._column(target, join.on.target),
            )
            source = source.outerjoin(target, on)
            selected.extend(
                c.label(f"{target.name}.{c.name}")
                for c in target.columns
                if c.name != join.on.target
            )

        conditions = []
        if request.search_term and request.search_columns:
            pattern = f"%{request.search_term.lower()}%"
            conditions.append(
                or_(
                    *[
                        func.lower(cast(self._column(tbl, name), String)).like(pattern)
                        for name in request.search_columns
                    ]
                )
            )
        where = self._where(tbl, request.where)
        if where is not None:
            conditions.append(where)

        stmt = select(*selected).select_from(source)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return tbl, stmt

    def read_sync(self, request: ReadRequest) -> ReadResult:
        try:
            tbl, stmt = self._build_select(request)
            count_stmt = select(func.count()).select_from(stmt.subquery())
            page_stmt = stmt.order_by(*tbl.primary_key.columns).offset(request.offset).limit(request.limit)
            with self.engine.connect() as conn:
                total = conn.execute(count_stmt).scalar_one()
                result = conn.execute(page_stmt)
                columns = list(result.keys())
                data = [dict(row._mapping) for row in result]
        except DataAccessError as exc:
            log.warning("Read rejected for %s: %s", request.table, exc.message)
            return ReadResult(error=exc.message)
        except SQLAlchemyError as exc:
            log.exception("Read failed for %s", request.table)
            return ReadResult(error=_error_message(exc))
        return ReadResult(data=data, count=total, columns=columns)

    async def read(self, request: ReadRequest) -> ReadResult:
        return await run_in_threadpool(self.read_sync, request)

    # --- delete ---
    def delete_sync(self, request: DeleteRequest) -> DeleteResult:
        if not request.where:
            # never issue an unbounded delete
            return DeleteResult(valid=False, error="Delete requires at least one where clause")
        try:
            tbl = self._table(request.table)
            stmt = delete(tbl).where(self._where(tbl, request.where))
            with self.engine.begin() as conn:
                deleted = conn.execute(stmt).rowcount
        except DataAccessError as exc:
            log.warning("Delete rejected for %s: %s", request.table, exc.message)
            return DeleteResult(valid=False, error=exc.message)
        except SQLAlchemyError as exc:
            log.exception("Delete failed for %s", request.table)
            return DeleteResult(valid=False, error=_error_message(exc))
        log.info("Deleted %s row(s) from %s", deleted, request.table)
        return DeleteResult(valid=True, deleted=deleted)

    async def delete(self, request: DeleteRequest) -> DeleteResult:
        return await run_in_threadpool(self.delete_sync, request)
