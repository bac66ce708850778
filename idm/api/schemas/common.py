# This file defines shared schema pieces reused by every API endpoint.
# Success and error responses use the same envelope so clients can branch on `success` alone.
# Version and request tracing fields are carried on every envelope.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class EnvelopeFields(BaseModel):
    success: bool
    message: str | None = None
    api_version: str
    schema_version: str
    request_id: str
    generated_at: datetime


class EmptyResponse(EnvelopeFields):
    data: None = None

