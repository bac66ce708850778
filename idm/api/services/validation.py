# This file validates service inputs against the request models before any store access.
# Pydantic failures are converted into the domain ValidationError with a readable message.

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from idm.api.schemas.record_schemas import CreateRequest, IdRequest, IdsRequest
from idm.common.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestValidator(Protocol):
    def validate_create(self, name: str) -> CreateRequest: ...

    def validate_id(self, record_id: int) -> IdRequest: ...

    def validate_ids(self, ids: Sequence[int]) -> IdsRequest: ...


def _summarize(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else str(error["msg"]))
    return "; ".join(parts)


class PydanticRequestValidator:
    """Default validator backed by the request models."""

    def validate_create(self, name: str) -> CreateRequest:
        return self._validate(CreateRequest, {"name": name})

    def validate_id(self, record_id: int) -> IdRequest:
        return self._validate(IdRequest, {"id": record_id})

    def validate_ids(self, ids: Sequence[int]) -> IdsRequest:
        return self._validate(IdsRequest, {"ids": list(ids)})

    @staticmethod
    def _validate(model: type[ModelT], payload: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(
                _summarize(exc),
                details=exc.errors(include_url=False, include_context=False),
            ) from exc
