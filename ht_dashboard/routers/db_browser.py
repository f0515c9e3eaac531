"""Read-only database browser endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..logging import logger
from ..services.db_browser import (
    DEFAULT_ROW_LIMIT,
    UnknownTableError,
    get_table_data,
    get_table_names,
)
from .schemas import TableDataResponse, TableEnvelope, TableListResponse

router = APIRouter()


@router.get("/tables", response_model=TableListResponse)
def list_tables() -> TableListResponse:
    return TableListResponse(tables=get_table_names())


@router.get("/tables/{table_name}", response_model=TableEnvelope)
def get_table(
    table_name: str,
    limit: int = Query(DEFAULT_ROW_LIMIT, ge=1, le=5000),
    session: Session = Depends(get_db),
) -> TableEnvelope:
    try:
        data = get_table_data(session, table_name, limit)
    except UnknownTableError as exc:
        logger.warning("db_browser_unknown_table", table=table_name)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TableEnvelope(table=TableDataResponse(**data))
