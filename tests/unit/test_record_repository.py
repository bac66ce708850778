# This file tests the SQL repository and the record service against an in-memory SQLite database.
# It exercises the real statements, the id-set expansion, and rollback of a half-finished create.

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime

import pytest
from sqlalchemy import event
from sqlalchemy.engine import Engine

from idm.api.db_access import DatabaseClient, DatabaseTransaction
from idm.api.repositories.record_repository import SqlRecordRepository
from idm.api.services.record_service import EMPLOYEE_LABELS, RecordService
from idm.common.db import build_engine
from idm.common.errors import (
    AlreadyExistsError,
    InfrastructureError,
    NotFoundError,
    StoreError,
    ValidationError,
)

SQLITE_RECORD_DDL = """
CREATE TABLE {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    with engine.begin() as connection:
        for table in ("employee", "role"):
            connection.exec_driver_sql(SQLITE_RECORD_DDL.format(table=table))
    yield engine
    engine.dispose()


@pytest.fixture
def statements(engine: Engine) -> list[str]:
    seen: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:  # noqa: ANN001
        seen.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    return seen


@pytest.fixture
def repository(engine: Engine) -> SqlRecordRepository:
    return SqlRecordRepository(db=DatabaseClient(engine=engine), table_name="employee")


@pytest.fixture
def service(repository: SqlRecordRepository) -> RecordService:
    return RecordService(repository=repository, labels=EMPLOYEE_LABELS)


def test_create_and_read_back(service: RecordService) -> None:
    new_id = service.create("Alice")

    record = service.find_by_id(new_id)

    assert record.name == "Alice"
    assert isinstance(record.created_at, datetime)
    assert isinstance(record.updated_at, datetime)


def test_duplicate_create_keeps_single_row(service: RecordService, repository: SqlRecordRepository) -> None:
    service.create("Alice")

    with pytest.raises(AlreadyExistsError):
        service.create("Alice")

    assert [record.name for record in repository.find_all()] == ["Alice"]


def test_tables_are_independent(engine: Engine, service: RecordService) -> None:
    roles = SqlRecordRepository(db=DatabaseClient(engine=engine), table_name="role")
    service.create("Alice")

    assert roles.find_all() == []


def test_find_all_by_ids_and_delete_all_by_ids(service: RecordService) -> None:
    first = service.create("Alice")
    second = service.create("Bob")
    third = service.create("Carol")

    assert [record.id for record in service.find_all_by_ids([third, first])] == [first, third]

    service.delete_all_by_ids([first, third])

    assert [record.id for record in service.find_all()] == [second]


def test_delete_by_id_then_find_is_not_found(service: RecordService) -> None:
    new_id = service.create("Alice")

    service.delete_by_id(new_id)

    with pytest.raises(NotFoundError):
        service.find_by_id(new_id)


def test_delete_of_missing_id_is_a_no_op(service: RecordService) -> None:
    service.delete_by_id(404)


def test_empty_id_sets_do_not_reach_the_database(
    repository: SqlRecordRepository, statements: list[str]
) -> None:
    assert repository.find_all_by_ids([]) == []
    repository.delete_all_by_ids([])

    assert statements == []


class FailingAfterInsertRepository(SqlRecordRepository):
    def save_tx(self, tx: DatabaseTransaction, name: str) -> int:
        super().save_tx(tx, name)
        raise StoreError("constraint check failed")


def test_insert_failure_rolls_back_written_row(engine: Engine, repository: SqlRecordRepository) -> None:
    failing = FailingAfterInsertRepository(db=DatabaseClient(engine=engine), table_name="employee")
    service = RecordService(repository=failing, labels=EMPLOYEE_LABELS)

    with pytest.raises(InfrastructureError, match="error saving employee with name: Alice"):
        service.create("Alice")

    assert repository.find_all() == []


def test_missing_table_surfaces_as_store_error(engine: Engine) -> None:
    missing = SqlRecordRepository(db=DatabaseClient(engine=engine), table_name="department")

    with pytest.raises(StoreError):
        missing.find_all()


def test_unsafe_table_name_is_rejected(engine: Engine) -> None:
    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        SqlRecordRepository(db=DatabaseClient(engine=engine), table_name="employee;--")


def test_can_connect_with_timeout(engine: Engine) -> None:
    assert DatabaseClient(engine=engine).can_connect(timeout_seconds=2.0) is True


def test_oversized_id_is_rejected_before_reaching_sqlite(
    service: RecordService, statements: list[str]
) -> None:
    with pytest.raises(ValidationError):
        service.find_by_id(2**63)
    with pytest.raises(ValidationError):
        service.delete_all_by_ids([1, 2**63])

    assert statements == []
