from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, HTTPException
from services.api.app.db.database import db_session
from services.api.app.services.catalog import SqlCatalogProvider
from services.api.app.services.store import CheckoutSession, store
from sqlalchemy.orm import Session


def get_db() -> Generator[Session, None, None]:
    db = db_session()
    try:
        yield db
    finally:
        db.close()


def get_catalog(db: Session = Depends(get_db)) -> SqlCatalogProvider:
    return SqlCatalogProvider(db)


def get_checkout_session(session_id: str) -> CheckoutSession:
    session = store.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Checkout session not found")
    return session
