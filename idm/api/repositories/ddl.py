"""DDL helpers for record tables."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

PROJECT_ROOT = Path(__file__).resolve().parents[3]

RECORD_DDL_ORDER: list[str] = [
    "role.sql",
    "employee.sql",
]


def apply_record_ddl(engine: Engine, ddl_dir: Path | None = None) -> None:
    """Apply record table DDL files in deterministic order."""

    ddl_path = ddl_dir or (PROJECT_ROOT / "sql/ddl")
    with engine.begin() as connection:
        for ddl_file in RECORD_DDL_ORDER:
            sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
            connection.exec_driver_sql(sql_text)
