# This file exposes the employee CRUD routes under the versioned API path.

from __future__ import annotations

from idm.api.dependencies import get_employee_service
from idm.api.routers.records import build_record_router
from idm.api.services.record_service import EMPLOYEE_LABELS

router = build_record_router(labels=EMPLOYEE_LABELS, service_provider=get_employee_service)
