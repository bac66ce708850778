# This file defines request and response models for the employee and role endpoints.
# Body models only describe the JSON shape; name and id rules live in the request models
# that the service validator applies before touching the store.

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from idm.api.schemas.common import EnvelopeFields

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 55
BIGINT_MAX = 2**63 - 1

# Ids are stored as signed 64-bit integers.
RecordId = Annotated[int, Field(gt=0, le=BIGINT_MAX)]


class CreateBody(BaseModel):
    name: str


class IdsBody(BaseModel):
    ids: list[int]


class CreateRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)


class IdRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: RecordId


class IdsRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    ids: list[RecordId] = Field(default_factory=list)


class RecordResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class RecordIdResponse(EnvelopeFields):
    data: int


class RecordObjectResponse(EnvelopeFields):
    data: RecordResponse


class RecordListResponse(EnvelopeFields):
    data: list[RecordResponse]
