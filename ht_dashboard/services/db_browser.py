"""Read-only table browser over the dashboard's own tables."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, TypedDict

from sqlalchemy import desc, inspect, select
from sqlalchemy.orm import Session

from ..db import Base, Match, Player, PlayerChange, PlayerSnapshot, SyncRun

DEFAULT_ROW_LIMIT = 1000

BROWSABLE_TABLES: dict[str, type[Base]] = {
    "Player": Player,
    "PlayerSnapshot": PlayerSnapshot,
    "PlayerChange": PlayerChange,
    "SyncRun": SyncRun,
    "Match": Match,
}


class UnknownTableError(LookupError):
    pass


class TableData(TypedDict):
    tableName: str
    columns: list[str]
    rows: list[dict[str, Any]]
    rowCount: int


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _cell(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return value


def get_table_names() -> list[str]:
    return list(BROWSABLE_TABLES)


def get_table_data(session: Session, table_name: str, limit: int = DEFAULT_ROW_LIMIT) -> TableData:
    """Newest rows first, every column, camelCase column names.

    Raises:
        UnknownTableError: for anything outside the browsable tables.
    """
    model = BROWSABLE_TABLES.get(table_name)
    if model is None:
        raise UnknownTableError(f"Unknown table: {table_name}")

    attributes = [column.key for column in inspect(model).column_attrs]
    records = session.execute(select(model).order_by(desc(model.id)).limit(limit)).scalars()
    rows = [
        {camel_case(attr): _cell(getattr(record, attr)) for attr in attributes}
        for record in records
    ]
    return {
        "tableName": table_name,
        "columns": [camel_case(attr) for attr in attributes],
        "rows": rows,
        "rowCount": len(rows),
    }
