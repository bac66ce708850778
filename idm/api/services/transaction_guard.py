# This file implements the scoped transaction used by multi-statement service operations.
# The guard begins a transaction on entry and decides on exit whether to commit or roll back.
# Domain errors raised inside the block roll back and propagate with their kind intact.
# Any other exception rolls back and is re-raised as an InfrastructureError carrying the fault.

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol

from idm.common.errors import DomainError, InfrastructureError

LOGGER = logging.getLogger("idm.transaction")


class TransactionHandle(Protocol):
    def fetch_scalar(self, query: Any, params: Any = None) -> Any: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class TransactionGuard:
    """Context manager around one store transaction.

    Usage::

        with TransactionGuard(repository.begin, operation="creating employee") as tx:
            ...

    On a clean exit the transaction is committed; a commit failure surfaces as
    `InfrastructureError("error committing transaction: ...")`.
    """

    def __init__(self, begin: Callable[[], TransactionHandle], *, operation: str) -> None:
        self._begin = begin
        self._operation = operation
        self._transaction: TransactionHandle | None = None

    def __enter__(self) -> TransactionHandle:
        try:
            self._transaction = self._begin()
        except Exception as exc:
            raise InfrastructureError(f"error creating transaction: {exc}") from exc
        return self._transaction

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        transaction = self._transaction
        self._transaction = None
        if transaction is None:
            return False

        if exc_value is None:
            try:
                transaction.commit()
            except Exception as exc:
                LOGGER.error("%s: commit failed: %s", self._operation, exc)
                raise InfrastructureError(f"error committing transaction: {exc}") from exc
            LOGGER.debug("%s: committed", self._operation)
            return False

        rollback_error = self._rollback(transaction)

        if not isinstance(exc_value, Exception):
            # Interrupts and exits keep their type after the rollback.
            return False

        if isinstance(exc_value, DomainError):
            if rollback_error is None:
                return False
            raise InfrastructureError(
                f"{exc_value.message}; rollback error: {rollback_error}"
            ) from exc_value

        LOGGER.error("%s: unexpected fault, rolled back: %r", self._operation, exc_value)
        message = f"{self._operation} panic: {exc_value}"
        if rollback_error is not None:
            message = f"{message}; rollback error: {rollback_error}"
        raise InfrastructureError(message) from exc_value

    def _rollback(self, transaction: TransactionHandle) -> Exception | None:
        try:
            transaction.rollback()
        except Exception as exc:
            LOGGER.error("%s: rollback failed: %s", self._operation, exc)
            return exc
        LOGGER.debug("%s: rolled back", self._operation)
        return None
