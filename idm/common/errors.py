"""
Domain error kinds shared by services and the HTTP layer.

Every failure a service surfaces is a `DomainError` subclass carrying a `kind`
discriminant. The HTTP layer maps kinds to status codes without inspecting
messages. `StoreError` is the repository-level failure raised when the database
driver reports an error; services wrap it into one of the domain kinds.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    INFRASTRUCTURE = "INFRASTRUCTURE_ERROR"


class DomainError(Exception):
    """Base class for classified service failures."""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str, *, details: object | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(DomainError):
    """Input does not satisfy the request rules."""

    kind = ErrorKind.VALIDATION


class AlreadyExistsError(DomainError):
    """A record with the same name is already stored."""

    kind = ErrorKind.ALREADY_EXISTS


class NotFoundError(DomainError):
    """A record is missing or the lookup itself failed."""

    kind = ErrorKind.NOT_FOUND


class InfrastructureError(DomainError):
    """Transaction, connection, or commit failure."""

    kind = ErrorKind.INFRASTRUCTURE


class StoreError(Exception):
    """Raised by repositories when a statement fails in the database."""


__all__ = [
    "ErrorKind",
    "DomainError",
    "ValidationError",
    "AlreadyExistsError",
    "NotFoundError",
    "InfrastructureError",
    "StoreError",
]
