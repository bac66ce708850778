# This file provides in-memory fakes for service-level tests.
# The fake repository stages inserts per transaction so commit and rollback behave like a real store.
# Failure switches let tests break one step of the create flow at a time.

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from idm.api.repositories.record_repository import Record
from idm.common.errors import StoreError


class FakeTransaction:
    def __init__(self, repository: InMemoryRecordRepository) -> None:
        self.repository = repository
        self.pending: list[Record] = []
        self.committed = False
        self.rolled_back = False

    def fetch_scalar(self, query: object, params: object = None) -> None:
        raise NotImplementedError

    def commit(self) -> None:
        self.repository.calls.append("commit")
        if self.repository.fail_commit:
            raise StoreError("commit error")
        self.repository.rows.extend(self.pending)
        self.pending = []
        self.committed = True

    def rollback(self) -> None:
        self.repository.calls.append("rollback")
        self.pending = []
        self.rolled_back = True
        if self.repository.fail_rollback:
            raise StoreError("rollback error")


class InMemoryRecordRepository:
    """Record store held in a list, with per-step failure switches."""

    def __init__(self) -> None:
        self.rows: list[Record] = []
        self.calls: list[str] = []
        self.transactions: list[FakeTransaction] = []
        self._next_id = 1
        self.fail_begin = False
        self.fail_exists = False
        self.fail_save = False
        self.fault_on_save: Exception | None = None
        self.fail_commit = False
        self.fail_rollback = False
        self.fail_reads = False
        self.fail_deletes = False

    def begin(self) -> FakeTransaction:
        self.calls.append("begin")
        if self.fail_begin:
            raise StoreError("transaction begin error")
        tx = FakeTransaction(self)
        self.transactions.append(tx)
        return tx

    def exists_by_name_tx(self, tx: FakeTransaction, name: str) -> bool:
        self.calls.append("exists_by_name_tx")
        if self.fail_exists:
            raise StoreError("find error")
        return any(row.name == name for row in [*self.rows, *tx.pending])

    def save_tx(self, tx: FakeTransaction, name: str) -> int:
        self.calls.append("save_tx")
        if self.fault_on_save is not None:
            raise self.fault_on_save
        if self.fail_save:
            raise StoreError("save error")
        now = datetime.now(tz=UTC)
        record = Record(id=self._next_id, name=name, created_at=now, updated_at=now)
        self._next_id += 1
        tx.pending.append(record)
        return record.id

    def find_by_id(self, record_id: int) -> Record | None:
        self.calls.append("find_by_id")
        if self.fail_reads:
            raise StoreError("database error")
        return next((row for row in self.rows if row.id == record_id), None)

    def find_all(self) -> list[Record]:
        self.calls.append("find_all")
        if self.fail_reads:
            raise StoreError("database error")
        return list(self.rows)

    def find_all_by_ids(self, ids: Sequence[int]) -> list[Record]:
        self.calls.append("find_all_by_ids")
        if self.fail_reads:
            raise StoreError("database error")
        wanted = set(ids)
        return [row for row in self.rows if row.id in wanted]

    def delete_by_id(self, record_id: int) -> None:
        self.calls.append("delete_by_id")
        if self.fail_deletes:
            raise StoreError("database error")
        self.rows = [row for row in self.rows if row.id != record_id]

    def delete_all_by_ids(self, ids: Sequence[int]) -> None:
        self.calls.append("delete_all_by_ids")
        if self.fail_deletes:
            raise StoreError("database error")
        doomed = set(ids)
        self.rows = [row for row in self.rows if row.id not in doomed]

    def names(self) -> list[str]:
        return [row.name for row in self.rows]
