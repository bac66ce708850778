# This file provides shared helpers for API endpoint tests.
# Tests override service dependencies so no real database is touched.
# The helpers build a deterministic config and a scoped TestClient context.

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi.testclient import TestClient

from idm.api.api_config import ApiConfig
from idm.api.app import app
from idm.api.dependencies import (
    get_config,
    get_database_client,
    get_employee_service,
    get_role_service,
)
from idm.api.repositories.record_repository import Record


def build_test_config() -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="idm-service",
        app_version="1.0.0",
        api_version_path="/api/v1",
        internal_path="/internal",
        schema_version="1.0.0",
        host="0.0.0.0",
        port=8080,
        database_url="sqlite+pysqlite:///:memory:",
        health_check_timeout_seconds=2.0,
        allowed_origins=[],
        employee_table_name="employee",
        role_table_name="role",
    )


class FakeDBClient:
    """Simple fake DB dependency for health endpoint tests."""

    def __init__(self, *, connected: bool = True) -> None:
        self._connected = connected
        self.timeouts: list[float | None] = []

    def can_connect(self, *, timeout_seconds: float | None = None) -> bool:
        self.timeouts.append(timeout_seconds)
        return self._connected


def make_record(record_id: int, name: str) -> Record:
    stamp = datetime(2026, 1, 15, 9, 30, tzinfo=UTC)
    return Record(id=record_id, name=name, created_at=stamp, updated_at=stamp)


class FakeRecordService:
    """Scripted stand-in for RecordService.

    Each operation returns its configured result or raises the configured error,
    and every call is recorded as `(operation, argument)`.
    """

    def __init__(self, **outcomes: Any) -> None:
        self.outcomes = outcomes
        self.calls: list[tuple[str, Any]] = []

    def _resolve(self, operation: str, argument: Any, default: Any = None) -> Any:
        self.calls.append((operation, argument))
        outcome = self.outcomes.get(operation, default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def create(self, name: str) -> int:
        return self._resolve("create", name, 1)

    def find_by_id(self, record_id: int) -> Record:
        return self._resolve("find_by_id", record_id)

    def find_all(self) -> list[Record]:
        return self._resolve("find_all", None, [])

    def find_all_by_ids(self, ids: Sequence[int]) -> list[Record]:
        return self._resolve("find_all_by_ids", list(ids), [])

    def delete_by_id(self, record_id: int) -> None:
        return self._resolve("delete_by_id", record_id)

    def delete_all_by_ids(self, ids: Sequence[int]) -> None:
        return self._resolve("delete_all_by_ids", list(ids))


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    employee_service: Any | None = None,
    role_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    previous_config = app.state.config

    app.state.config = resolved_config
    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if employee_service is not None:
        app.dependency_overrides[get_employee_service] = lambda: employee_service
    if role_service is not None:
        app.dependency_overrides[get_role_service] = lambda: role_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        app.state.config = previous_config
