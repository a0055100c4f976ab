from __future__ import annotations

import os

from services.api.app.config import parse_bool
from services.api.app.db.database import get_engine
from services.api.app.db.models import Base


def init_db() -> None:
    if not parse_bool(os.getenv("LABCART_DB_AUTO_CREATE"), default=True):
        return

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
