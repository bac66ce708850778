# This file builds the FastAPI application and registers all API routers.
# Startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, and Prometheus request metrics to every response.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint
from starlette.routing import Match

from idm.api.api_config import ApiConfig, get_api_config
from idm.api.dependencies import get_database_client
from idm.api.error_handlers import register_error_handlers
from idm.api.routers.employees import router as employees_router
from idm.api.routers.info import router as info_router
from idm.api.routers.roles import router as roles_router
from idm.common.logging import configure_logging

LOGGER = logging.getLogger("idm.api")

UNMATCHED_PATH_LABEL = "unmatched"

API_HTTP_REQUESTS_TOTAL = Counter(
    "idm_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "idm_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "idm_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def _route_label(request: Request) -> str:
    """Return the matched route template, or `unmatched`, as the metric path label."""

    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_PATH_LABEL)
    return UNMATCHED_PATH_LABEL


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = config or get_api_config()

    app = FastAPI(
        title=config.api_name,
        description="Employee and role management API.",
        version=config.app_version,
        openapi_tags=[
            {"name": "employees", "description": "Create, read, and delete employees."},
            {"name": "roles", "description": "Create, read, and delete roles."},
            {"name": "internal", "description": "Service info and database health."},
        ],
    )
    app.state.config = config

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = _route_label(request)
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            LOGGER.info("%s %s -> %s | %.1fms", method_label, request.url.path, status_code, duration_ms)
            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        try:
            db = get_database_client()
            app.state.db_connected_at_startup = db.can_connect(
                timeout_seconds=config.health_check_timeout_seconds
            )
        except Exception:
            LOGGER.warning("database client could not be created at startup", exc_info=True)
            app.state.db_connected_at_startup = False
        if not app.state.db_connected_at_startup:
            LOGGER.warning("database is not reachable at startup")

    register_error_handlers(app)

    app.include_router(info_router, prefix=config.internal_path)
    app.include_router(employees_router, prefix=config.api_version_path)
    app.include_router(roles_router, prefix=config.api_version_path)

    return app


app = create_app()
