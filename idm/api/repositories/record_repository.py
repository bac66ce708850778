# This file implements SQL access for tables shaped like employee and role records.
# Each repository instance is bound to one validated table name and holds no business rules.
# Driver failures are translated into StoreError so services never see SQLAlchemy types.
# Empty id sets return immediately without a database round-trip.

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import BigInteger, DateTime, Text, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import BindParameter
from sqlalchemy.sql.selectable import TextualSelect

from idm.api.db_access import DatabaseClient, DatabaseTransaction
from idm.common.errors import StoreError

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


@dataclass(frozen=True)
class Record:
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class RecordRepo(Protocol):
    """Store operations a record service depends on."""

    def begin(self) -> Any: ...

    def exists_by_name_tx(self, tx: Any, name: str) -> bool: ...

    def save_tx(self, tx: Any, name: str) -> int: ...

    def find_by_id(self, record_id: int) -> Record | None: ...

    def find_all(self) -> list[Record]: ...

    def find_all_by_ids(self, ids: Sequence[int]) -> list[Record]: ...

    def delete_by_id(self, record_id: int) -> None: ...

    def delete_all_by_ids(self, ids: Sequence[int]) -> None: ...


def _row_to_record(row: dict[str, Any]) -> Record:
    return Record(
        id=int(row["id"]),
        name=str(row["name"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SqlRecordRepository:
    """Record repository backed by `DatabaseClient`."""

    def __init__(self, *, db: DatabaseClient, table_name: str) -> None:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        self.db = db
        self.table_name = table_name

    def begin(self) -> DatabaseTransaction:
        try:
            return self.db.begin()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def exists_by_name_tx(self, tx: DatabaseTransaction, name: str) -> bool:
        query = f"SELECT EXISTS (SELECT 1 FROM {self.table_name} WHERE name = :name) AS exists_flag"
        try:
            return bool(tx.fetch_scalar(query, {"name": name}))
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def save_tx(self, tx: DatabaseTransaction, name: str) -> int:
        query = f"INSERT INTO {self.table_name} (name) VALUES (:name) RETURNING id"
        try:
            return int(tx.fetch_scalar(query, {"name": name}))
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def find_by_id(self, record_id: int) -> Record | None:
        query = self._select("WHERE id = :id")
        try:
            row = self.db.fetch_one(query, {"id": record_id})
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return _row_to_record(row) if row is not None else None

    def find_all(self) -> list[Record]:
        query = self._select("ORDER BY id ASC")
        try:
            rows = self.db.fetch_all(query)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return [_row_to_record(row) for row in rows]

    def find_all_by_ids(self, ids: Sequence[int]) -> list[Record]:
        if len(ids) == 0:
            return []
        query = self._select("WHERE id IN :ids ORDER BY id ASC", bindparam("ids", expanding=True))
        try:
            rows = self.db.fetch_all(query, {"ids": list(ids)})
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return [_row_to_record(row) for row in rows]

    def delete_by_id(self, record_id: int) -> None:
        query = f"DELETE FROM {self.table_name} WHERE id = :id"
        try:
            self.db.execute(query, {"id": record_id})
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def delete_all_by_ids(self, ids: Sequence[int]) -> None:
        if len(ids) == 0:
            return
        query = text(f"DELETE FROM {self.table_name} WHERE id IN :ids").bindparams(
            bindparam("ids", expanding=True)
        )
        try:
            self.db.execute(query, {"ids": list(ids)})
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def _select(self, suffix: str, *binds: BindParameter[Any]) -> TextualSelect:
        clause = text(f"SELECT id, name, created_at, updated_at FROM {self.table_name} {suffix}")
        if binds:
            clause = clause.bindparams(*binds)
        return clause.columns(
            id=BigInteger,
            name=Text,
            created_at=DateTime(timezone=True),
            updated_at=DateTime(timezone=True),
        )
