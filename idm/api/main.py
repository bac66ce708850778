"""Command-line entrypoint that serves the API with uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from idm.api.api_config import get_api_config
from idm.common.logging import configure_logging


def parse_args() -> argparse.Namespace:
    config = get_api_config()
    parser = argparse.ArgumentParser(description="Run the IDM HTTP API")
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    return parser.parse_args()


def main() -> None:
    configure_logging()
    args = parse_args()
    # uvicorn handles SIGINT/SIGTERM and drains in-flight requests before exiting.
    uvicorn.run(
        "idm.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        timeout_graceful_shutdown=5,
        log_config=None,
    )


if __name__ == "__main__":
    main()
