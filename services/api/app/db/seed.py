from __future__ import annotations

from decimal import Decimal

from services.api.app.db.models import LabPackage
from sqlalchemy.orm import Session

# (id, name, category, test_count, price, original_price, discount_percentage)
DEFAULT_PACKAGES: tuple[tuple[str, str, str, int, str, str | None, str | None], ...] = (
    ("PKG-CBC", "Complete Blood Count (CBC)", "Basic", 24, "560", "800", "30"),
    ("PKG-LIPID", "Lipid Profile Complete", "Heart", 8, "840", "1200", "30"),
    ("PKG-DIAB", "Diabetes Panel Advanced", "Diabetes", 6, "1050", "1500", "30"),
    ("PKG-LFT", "Liver Function Test (LFT)", "Organ", 11, "1000", None, None),
    ("PKG-KFT", "Kidney Function Test (KFT)", "Organ", 9, "630", "900", "30"),
    ("PKG-THYROID", "Thyroid Profile Complete (T3, T4, TSH)", "Hormone", 3, "1800", None, None),
    ("PKG-BASIC", "Basic Blood Profile", "Basic", 25, "899", "1299", None),
    ("PKG-FULL", "Complete Health Package", "Comprehensive", 85, "2499", "3499", None),
)


def _dec(raw: str | None) -> Decimal | None:
    return Decimal(raw) if raw is not None else None


def seed_packages(db: Session) -> int:
    """Insert the default catalog. Existing ids are left untouched. Returns rows added."""
    added = 0
    for pid, name, category, test_count, price, original, discount in DEFAULT_PACKAGES:
        if db.get(LabPackage, pid) is not None:
            continue
        db.add(
            LabPackage(
                id=pid,
                name=name,
                category=category,
                test_count=test_count,
                price=Decimal(price),
                original_price=_dec(original),
                discount_percentage=_dec(discount),
                is_active=True,
            )
        )
        added += 1

    db.commit()
    return added
