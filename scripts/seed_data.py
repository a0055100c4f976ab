from __future__ import annotations

import argparse

from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.models import LabPackage
from services.api.app.db.seed import seed_packages


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the default lab package catalog")
    parser.add_argument(
        "--deactivate",
        action="append",
        default=[],
        metavar="PACKAGE_ID",
        help="Mark a package inactive after seeding (repeatable)",
    )
    args = parser.parse_args()

    init_db()

    db = db_session()
    try:
        added = seed_packages(db)

        for package_id in args.deactivate:
            row = db.get(LabPackage, package_id)
            if row is None:
                print(f"Unknown package id: {package_id}")
                continue
            row.is_active = False
        db.commit()

        print(f"Seeded {added} package(s)")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
