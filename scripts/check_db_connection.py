#!/usr/bin/env python3
import sys
from pathlib import Path

from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from calendlyx.core.config import settings  # noqa: E402
from calendlyx.db.session import engine  # noqa: E402

EXPECTED_TABLES = ("activities", "schedule_requests", "activity_types", "participants", "districts")


def _masked(value: str | None) -> str:
    if not value:
        return "<empty>"
    if len(value) <= 2:
        return "*" * len(value)
    return f"{value[0]}{'*' * (len(value) - 2)}{value[-1]}"


def main() -> int:
    url = make_url(settings.database_url_resolved)
    print("DB runtime settings:")
    print(f"- DATABASE_URL set: {bool(settings.database_url)}")
    print(f"- driver: {url.drivername}")
    print(f"- host: {url.host!r}")
    print(f"- port: {url.port}")
    print(f"- user: {url.username!r}")
    print(f"- database: {url.database!r}")
    print(f"- password: {_masked(url.password)}")

    if url.password == "change_me":
        print(
            "ERROR: the database password is still set to 'change_me'. "
            "Set your real password in .env."
        )
        return 2

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            tables = set(inspect(conn).get_table_names())
    except Exception as exc:
        print(f"ERROR: {exc}")
        print("Tip: verify user/password grants and test with the database CLI using the same host/port.")
        return 1

    print("OK: Connected and executed SELECT 1.")
    missing = [name for name in EXPECTED_TABLES if name not in tables]
    if missing:
        print(f"WARNING: missing tables {missing}; run scripts/init_db.py")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
