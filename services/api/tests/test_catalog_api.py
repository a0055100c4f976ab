from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient


def _dec(value) -> Decimal:
    return Decimal(str(value))


def test_list_packages_returns_seeded_catalog_with_pricing(client: TestClient) -> None:
    resp = client.get("/v1/packages")
    assert resp.status_code == 200
    rows = {r["package"]["id"]: r for r in resp.json()}

    assert "PKG-BASIC" in rows and "PKG-FULL" in rows
    basic = rows["PKG-BASIC"]["pricing"]
    assert _dec(basic["effective_price"]) == Decimal("899")
    assert _dec(basic["reference_price"]) == Decimal("1299")
    assert _dec(basic["savings"]) == Decimal("400")
    assert basic["has_discount"] is True

    lft = rows["PKG-LFT"]["pricing"]
    assert lft["has_discount"] is False
    assert _dec(lft["savings"]) == Decimal("0")


def test_get_package_unknown_is_404(client: TestClient) -> None:
    resp = client.get("/v1/packages/PKG-NOPE")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Package not found"


def test_validate_package_form_reports_errors_and_preview(client: TestClient) -> None:
    resp = client.post(
        "/v1/packages/validate",
        json={"name": "", "test_count": "0", "price": "1500", "original_price": "1200"},
    )
    assert resp.status_code == 200
    body = resp.json()

    assert body["valid"] is False
    assert body["errors"] == {
        "name": "Package name is required",
        "test_count": "Test count must be a positive number",
        "original_price": "Original price must be greater than current price",
    }
    assert body["preview"]["has_discount"] is False


def test_validate_package_form_accepts_valid_input(client: TestClient) -> None:
    resp = client.post(
        "/v1/packages/validate",
        json={
            "name": "Vitamin Panel",
            "test_count": "4",
            "price": "700",
            "original_price": "1000",
            "discount_percentage": "30",
        },
    )
    body = resp.json()

    assert body["valid"] is True
    assert body["errors"] == {}
    preview = body["preview"]
    assert _dec(preview["calculated_discount_price"]) == Decimal("700")
    assert _dec(preview["savings"]) == Decimal("300")
    assert _dec(preview["actual_discount_percentage"]) == Decimal("30")
    assert preview["has_discount"] is True


def test_validate_package_form_with_out_of_range_amounts(client: TestClient) -> None:
    resp = client.post(
        "/v1/packages/validate",
        json={
            "name": "Vitamin Panel",
            "test_count": "4",
            "price": "1e30",
            "original_price": "1e30",
            "discount_percentage": "30",
        },
    )
    assert resp.status_code == 200
    body = resp.json()

    assert body["valid"] is False
    assert body["errors"] == {
        "price": "Price must be a valid positive number",
        "original_price": "Original price must be a valid positive number",
    }
    preview = body["preview"]
    assert _dec(preview["price"]) == Decimal("0")
    assert preview["has_discount"] is False
