# This file builds the CRUD routes shared by the employee and role resources.
# Each resource gets its own router instance bound to its service provider.
# Routes only translate HTTP input into service calls and wrap results in the success envelope;
# domain errors propagate to the global handlers, which map them to status codes.

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, Request

from idm.api.api_config import ApiConfig
from idm.api.dependencies import get_config
from idm.api.repositories.record_repository import Record
from idm.api.response_envelope import build_ok_envelope
from idm.api.schemas.common import EmptyResponse
from idm.api.schemas.record_schemas import (
    CreateBody,
    IdsBody,
    RecordIdResponse,
    RecordListResponse,
    RecordObjectResponse,
)
from idm.api.services.record_service import EntityLabels, RecordService

LOGGER = logging.getLogger("idm.api.records")


def _ok(request: Request, config: ApiConfig, data: object = None) -> dict[str, object]:
    return build_ok_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=data,
    )


def _as_rows(records: list[Record]) -> list[dict[str, object]]:
    return [record.to_dict() for record in records]


def build_record_router(
    *,
    labels: EntityLabels,
    service_provider: Callable[[], RecordService],
) -> APIRouter:
    """Create the six CRUD routes for one record resource."""

    router = APIRouter(prefix=f"/{labels.plural}", tags=[labels.plural])
    entity = labels.singular
    entities = labels.plural

    @router.post("", response_model=RecordIdResponse, name=f"create_{entity}")
    def create_record(
        request: Request,
        body: CreateBody,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("create %s: received request name=%r", entity, body.name)
        new_id = service.create(body.name)
        LOGGER.debug("create %s: success id=%s", entity, new_id)
        return _ok(request, config, new_id)

    @router.get("/{record_id}", response_model=RecordObjectResponse, name=f"find_{entity}_by_id")
    def find_by_id(
        request: Request,
        record_id: int,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("find %s by id: received id=%s", entity, record_id)
        record = service.find_by_id(record_id)
        return _ok(request, config, record.to_dict())

    @router.get("", response_model=RecordListResponse, name=f"find_all_{entities}")
    def find_all(
        request: Request,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("find all %s: received request", entities)
        records = service.find_all()
        LOGGER.debug("find all %s: success count=%d", entities, len(records))
        return _ok(request, config, _as_rows(records))

    @router.post("/ids", response_model=RecordListResponse, name=f"find_{entities}_by_ids")
    def find_all_by_ids(
        request: Request,
        body: IdsBody,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("find %s by ids: received ids=%s", entities, body.ids)
        records = service.find_all_by_ids(body.ids)
        LOGGER.debug("find %s by ids: success count=%d", entities, len(records))
        return _ok(request, config, _as_rows(records))

    @router.delete("/{record_id}", response_model=EmptyResponse, name=f"delete_{entity}_by_id")
    def delete_by_id(
        request: Request,
        record_id: int,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("delete %s by id: received id=%s", entity, record_id)
        service.delete_by_id(record_id)
        LOGGER.debug("delete %s by id: success id=%s", entity, record_id)
        return _ok(request, config)

    @router.delete("", response_model=EmptyResponse, name=f"delete_{entities}_by_ids")
    def delete_all_by_ids(
        request: Request,
        body: IdsBody,
        service: RecordService = Depends(service_provider),
        config: ApiConfig = Depends(get_config),
    ) -> dict[str, object]:
        LOGGER.debug("delete %s by ids: received ids=%s", entities, body.ids)
        service.delete_all_by_ids(body.ids)
        LOGGER.debug("delete %s by ids: success count=%d", entities, len(body.ids))
        return _ok(request, config)

    return router
