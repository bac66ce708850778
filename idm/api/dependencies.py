# This file provides dependency factories for FastAPI routes and middleware.
# Services and the database client are created once and shared through dependency injection.
# Tests replace any of these providers through `app.dependency_overrides`.

from __future__ import annotations

from functools import lru_cache

from idm.api.api_config import ApiConfig, get_api_config
from idm.api.db_access import DatabaseClient
from idm.api.repositories.record_repository import SqlRecordRepository
from idm.api.services.record_service import EMPLOYEE_LABELS, ROLE_LABELS, RecordService
from idm.api.services.validation import PydanticRequestValidator


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_validator() -> PydanticRequestValidator:
    return PydanticRequestValidator()


@lru_cache(maxsize=1)
def get_employee_service() -> RecordService:
    config = get_api_config()
    repository = SqlRecordRepository(db=get_database_client(), table_name=config.employee_table_name)
    return RecordService(repository=repository, labels=EMPLOYEE_LABELS, validator=get_validator())


@lru_cache(maxsize=1)
def get_role_service() -> RecordService:
    config = get_api_config()
    repository = SqlRecordRepository(db=get_database_client(), table_name=config.role_table_name)
    return RecordService(repository=repository, labels=ROLE_LABELS, validator=get_validator())


def get_config() -> ApiConfig:
    return get_api_config()
