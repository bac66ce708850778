# This file exposes the role CRUD routes under the versioned API path.

from __future__ import annotations

from idm.api.dependencies import get_role_service
from idm.api.routers.records import build_record_router
from idm.api.services.record_service import ROLE_LABELS

router = build_record_router(labels=ROLE_LABELS, service_provider=get_role_service)
