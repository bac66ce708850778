#!/usr/bin/env python3
"""
Create the employee and role tables if they do not exist.
Run it once against a fresh database before starting the API; it is safe to re-run.
"""
# ruff: noqa: E402

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from idm.api.repositories.ddl import RECORD_DDL_ORDER, apply_record_ddl
from idm.common.db import build_engine
from idm.common.settings import load_settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply record table DDL")
    parser.add_argument("--env-file", default=".env", help="Env file holding DATABASE_URL")
    parser.add_argument("--ddl-dir", default=None, help="Directory with the DDL files")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = load_settings(env_file=args.env_file)
    engine = build_engine(settings.DATABASE_URL)
    ddl_dir = Path(args.ddl_dir) if args.ddl_dir else None
    try:
        apply_record_ddl(engine, ddl_dir)
    finally:
        engine.dispose()
    print(json.dumps({"applied": RECORD_DDL_ORDER, "database": engine.url.render_as_string(hide_password=True)}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
