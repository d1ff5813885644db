# File: /dataview/routers/health.py | Version: 1.1 | Title: Health & readiness endpoints
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dataview.crud.data_access import SqlAlchemyDataAccess
from dataview.dependencies import get_data_access, get_db

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz() -> dict:
    """
    Liveness probe: returns 200 if the app can serve requests.
    """
    return {"status": "ok"}


@router.get("/readyz")
def readyz(
    db: Session = Depends(get_db),
    data_access: SqlAlchemyDataAccess = Depends(get_data_access),
):
    """
    Readiness probe: 200 when both the view catalog and the data source
    answer SELECT 1, else 503 with the failing side marked.
    """
    status = {"db": "ok", "source": "ok"}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        status["db"] = "error"
    try:
        with data_access.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        status["source"] = "error"

    if "error" in status.values():
        return JSONResponse({"status": "degraded", **status}, status_code=503)
    return {"status": "ok", **status}
