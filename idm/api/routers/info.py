# This file defines the internal info and health endpoints.
# Info reports the configured service name and version.
# Health pings the database with a short timeout so orchestrators can detect a lost connection.

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from idm.api.api_config import ApiConfig
from idm.api.db_access import DatabaseClient
from idm.api.dependencies import get_config, get_database_client
from idm.api.error_handlers import APIError
from idm.api.schemas.info_schemas import InfoResponse

LOGGER = logging.getLogger("idm.api.info")

router = APIRouter(tags=["internal"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


@router.get("/info", response_model=InfoResponse)
def info(config: ConfigDep) -> dict[str, str]:
    LOGGER.debug("get info: name=%s version=%s", config.api_name, config.app_version)
    return {"name": config.api_name, "version": config.app_version}


@router.get("/health", response_class=PlainTextResponse)
def health(config: ConfigDep, db: DBDep) -> str:
    if not db.can_connect(timeout_seconds=config.health_check_timeout_seconds):
        LOGGER.error("get health: database unreachable")
        raise APIError(status_code=500, error_code="DB_UNREACHABLE", message="DB not reachable")
    return "OK"
