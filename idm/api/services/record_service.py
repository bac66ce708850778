# This file implements the business operations for employee and role records.
# Creation runs the uniqueness check and the insert inside one TransactionGuard scope.
# Reads and deletes are single statements whose store failures surface as NotFoundError.
# The uniqueness check relies on the store's isolation level; two concurrent creations of
# the same name can both pass the check below read-committed isolation.

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from idm.api.repositories.record_repository import Record, RecordRepo
from idm.api.services.transaction_guard import TransactionGuard
from idm.api.services.validation import PydanticRequestValidator, RequestValidator
from idm.common.errors import AlreadyExistsError, InfrastructureError, NotFoundError, StoreError

LOGGER = logging.getLogger("idm.services")


@dataclass(frozen=True)
class EntityLabels:
    singular: str
    plural: str


EMPLOYEE_LABELS = EntityLabels(singular="employee", plural="employees")
ROLE_LABELS = EntityLabels(singular="role", plural="roles")


def _format_ids(ids: Sequence[int]) -> str:
    return "[" + " ".join(str(item) for item in ids) + "]"


class RecordService:
    """Create, read, and delete operations for one record table."""

    def __init__(
        self,
        *,
        repository: RecordRepo,
        labels: EntityLabels,
        validator: RequestValidator | None = None,
    ) -> None:
        self.repository = repository
        self.labels = labels
        self.validator = validator or PydanticRequestValidator()

    def create(self, name: str) -> int:
        """Insert a record named `name` unless one already exists; return its id."""

        request = self.validator.validate_create(name)
        entity = self.labels.singular

        with TransactionGuard(self.repository.begin, operation=f"creating {entity}") as tx:
            try:
                exists = self.repository.exists_by_name_tx(tx, request.name)
            except StoreError as exc:
                raise InfrastructureError(
                    f"error finding {entity} with name: {request.name} {exc}"
                ) from exc

            if exists:
                raise AlreadyExistsError(f"{entity} with name {request.name} already exists")

            try:
                new_id = self.repository.save_tx(tx, request.name)
            except StoreError as exc:
                raise InfrastructureError(
                    f"error saving {entity} with name: {request.name} {exc}"
                ) from exc

        LOGGER.info("created %s id=%s", entity, new_id)
        return new_id

    def find_by_id(self, record_id: int) -> Record:
        request = self.validator.validate_id(record_id)
        entity = self.labels.singular
        try:
            record = self.repository.find_by_id(request.id)
        except StoreError as exc:
            raise NotFoundError(f"error finding {entity} with id {request.id}: {exc}") from exc
        if record is None:
            raise NotFoundError(f"error finding {entity} with id {request.id}: no rows in result set")
        return record

    def find_all(self) -> list[Record]:
        try:
            return self.repository.find_all()
        except StoreError as exc:
            raise NotFoundError(f"error retrieving all {self.labels.plural}: {exc}") from exc

    def find_all_by_ids(self, ids: Sequence[int]) -> list[Record]:
        request = self.validator.validate_ids(ids)
        if not request.ids:
            return []
        try:
            return self.repository.find_all_by_ids(request.ids)
        except StoreError as exc:
            raise NotFoundError(
                f"error retrieving {self.labels.plural} by ids {_format_ids(request.ids)}: {exc}"
            ) from exc

    def delete_by_id(self, record_id: int) -> None:
        request = self.validator.validate_id(record_id)
        try:
            self.repository.delete_by_id(request.id)
        except StoreError as exc:
            raise NotFoundError(
                f"error deleting {self.labels.singular} with id {request.id}: {exc}"
            ) from exc

    def delete_all_by_ids(self, ids: Sequence[int]) -> None:
        request = self.validator.validate_ids(ids)
        if not request.ids:
            return
        try:
            self.repository.delete_all_by_ids(request.ids)
        except StoreError as exc:
            raise NotFoundError(
                f"error deleting {self.labels.plural} by ids {_format_ids(request.ids)}: {exc}"
            ) from exc
