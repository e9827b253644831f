#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from calendlyx.core.errors import DuplicateNameError  # noqa: E402
from calendlyx.db.session import SessionLocal, init_db  # noqa: E402
from calendlyx.services import reference_service  # noqa: E402
from calendlyx.services.changes import ACTIVITY_TYPES, DISTRICTS, PARTICIPANTS  # noqa: E402


def _seed(collection: str, names: list[str]) -> int:
    added = 0
    with SessionLocal() as db:
        for name in names:
            try:
                reference_service.add_reference(db, collection, name)
            except DuplicateNameError:
                print(f"- {collection}: {name!r} already present, skipped")
                continue
            added += 1
    return added


def main() -> int:
    parser = argparse.ArgumentParser(description="Create tables and optionally seed reference lists.")
    parser.add_argument("--type", dest="types", action="append", default=[], help="activity type to add")
    parser.add_argument("--participant", dest="participants", action="append", default=[])
    parser.add_argument("--district", dest="districts", action="append", default=[])
    args = parser.parse_args()

    init_db()
    print("Tables created (existing tables are left untouched).")

    for collection, names in (
        (ACTIVITY_TYPES, args.types),
        (PARTICIPANTS, args.participants),
        (DISTRICTS, args.districts),
    ):
        if names:
            print(f"Seeded {_seed(collection, names)} {collection}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
