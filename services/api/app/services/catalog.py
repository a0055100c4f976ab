from __future__ import annotations

from typing import Protocol

from packages.shared.schemas.catalog_v1 import PackageV1
from services.api.app.db.models import LabPackage
from sqlalchemy.orm import Session


class CatalogProvider(Protocol):
    def list_packages(self, *, include_inactive: bool = False) -> list[PackageV1]: ...

    def get_package(self, package_id: str) -> PackageV1 | None: ...


def package_from_row(row: LabPackage) -> PackageV1:
    return PackageV1(
        id=row.id,
        name=row.name,
        test_count=row.test_count,
        price=row.price,
        original_price=row.original_price,
        discount_percentage=row.discount_percentage,
        is_active=row.is_active,
        description=row.description,
        category=row.category,
    )


class SqlCatalogProvider:
    """Read-only view of the lab_packages table.

    Inactive packages are hidden from shoppers: get_package treats them as missing.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_packages(self, *, include_inactive: bool = False) -> list[PackageV1]:
        query = self._db.query(LabPackage)
        if not include_inactive:
            query = query.filter(LabPackage.is_active.is_(True))
        rows = query.order_by(LabPackage.created_at.asc(), LabPackage.id.asc()).all()
        return [package_from_row(r) for r in rows]

    def get_package(self, package_id: str) -> PackageV1 | None:
        row = self._db.get(LabPackage, package_id)
        if row is None or not row.is_active:
            return None
        return package_from_row(row)
