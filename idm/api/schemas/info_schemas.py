# This file defines the response schema for the internal info endpoint.

from __future__ import annotations

from pydantic import BaseModel


class InfoResponse(BaseModel):
    name: str
    version: str
