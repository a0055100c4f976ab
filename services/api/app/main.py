"""Lab storefront checkout API entrypoint."""

import logging

from fastapi import FastAPI

from services.api.app.config import CheckoutSettings
from services.api.app.db.init_db import init_db
from services.api.app.routers.audit import router as audit_router
from services.api.app.routers.cart import router as cart_router
from services.api.app.routers.catalog import router as catalog_router
from services.api.app.routers.checkout import router as checkout_router

app = FastAPI(title="Lab Checkout API")

app.include_router(catalog_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(audit_router)


@app.on_event("startup")
def _startup() -> None:
    logging.basicConfig(
        level=CheckoutSettings.from_env().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
