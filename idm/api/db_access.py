# This file wraps database access so repositories can run parameterized SQL safely.
# It keeps engine, connection, and transaction handling out of repository and router code.
# One-shot helpers run a single statement on a pooled connection.
# `begin()` hands out an explicit transaction that the caller commits or rolls back.

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine, Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable

from idm.common.db import build_engine

LOGGER = logging.getLogger("idm.db")

Statement = str | Executable


def _as_statement(query: Statement) -> Executable:
    return text(query) if isinstance(query, str) else query


class DatabaseTransaction:
    """An open transaction bound to one connection.

    The connection is released on `commit()` or `rollback()`, whichever runs
    first; later calls are no-ops.
    """

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._transaction = connection.begin()
        self._closed = False

    def execute(self, query: Statement, params: Mapping[str, Any] | None = None) -> Result[Any]:
        return self._connection.execute(_as_statement(query), dict(params or {}))

    def fetch_scalar(self, query: Statement, params: Mapping[str, Any] | None = None) -> Any:
        return self.execute(query, params).scalar_one()

    def commit(self) -> None:
        if self._closed:
            return
        try:
            self._transaction.commit()
        finally:
            self._release()

    def rollback(self) -> None:
        if self._closed:
            return
        try:
            self._transaction.rollback()
        finally:
            self._release()

    def _release(self) -> None:
        self._closed = True
        self._connection.close()


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for repository read/write access."""

    def __init__(self, *, database_url: str | None = None, engine: Engine | None = None) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("DatabaseClient requires a database_url or an engine.")
            engine = build_engine(database_url)
        self._engine: Engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self, *, timeout_seconds: float | None = None) -> bool:
        if timeout_seconds is None:
            return self._ping()

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="idm-db-ping")
        try:
            return executor.submit(self._ping).result(timeout=timeout_seconds)
        except FutureTimeoutError:
            LOGGER.warning("database ping exceeded %.2fs", timeout_seconds)
            return False
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def begin(self) -> DatabaseTransaction:
        connection = self._engine.connect()
        try:
            return DatabaseTransaction(connection)
        except SQLAlchemyError:
            connection.close()
            raise

    def fetch_all(self, query: Statement, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(_as_statement(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: Statement, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(_as_statement(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, query: Statement, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement in its own transaction and return the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(_as_statement(query), dict(params or {}))
            return result.rowcount

    def _ping(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
