from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def booking_fields() -> dict[str, str]:
    """A complete, valid checkout form."""
    return {
        "full_name": "Asha Rao",
        "email": "asha.rao@example.in",
        "phone": "9876543210",
        "age": "34",
        "gender": "female",
        "street_address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pin_code": "560001",
        "landmark": "",
        "preferred_date": (date.today() + timedelta(days=2)).isoformat(),
        "time_slot": "8:00 AM - 10:00 AM",
        "collection_type": "home",
        "special_instructions": "",
    }


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "labcart_api.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("LABCART_DB_AUTO_CREATE", "true")
    monkeypatch.setenv("LABCART_BOOKING_SUBMITTER", "mock")

    from services.api.app.db.database import db_session
    from services.api.app.db.seed import seed_packages
    from services.api.app.main import app

    with TestClient(app) as c:
        with db_session() as db:
            seed_packages(db)
        yield c


@pytest.fixture()
def session_id(client: TestClient) -> str:
    resp = client.post("/v1/sessions")
    assert resp.status_code == 200
    return resp.json()["session_id"]
