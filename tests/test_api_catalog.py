from __future__ import annotations

import pytest

JOB_BODY = {
    "customerName": "Ravi Kumar",
    "vehicleBrand": "Toyota",
    "vehicleModel": "Fortuner",
    "vehicleYear": 2024,
    "vehicleRegNo": "KA05MN4321",
    "package": "Front Kit PPF",
    "promisedDate": "2026-11-02T10:00:00Z",
}


@pytest.fixture
def product(client, admin_headers) -> dict:
    response = client.post(
        "/api/ppf-products",
        json={"name": "Ultimate Plus", "brand": "XPEL", "type": "gloss"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def roll(client, admin_headers, product) -> dict:
    response = client.post(
        "/api/ppf-rolls",
        json={"rollId": "XP-001", "productId": product["id"], "totalLengthMm": 15000, "usedLengthMm": 14000},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_technician_cannot_write_catalog(client, tech_headers):
    response = client.post("/api/packages", json={"name": "Ceramic Coat"}, headers=tech_headers)
    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


def test_package_create_list_and_conflict(client, admin_headers, tech_headers):
    created = client.post("/api/packages", json={"name": "Ceramic Coat"}, headers=admin_headers)
    assert created.status_code == 201

    duplicate = client.post("/api/packages", json={"name": "Ceramic Coat"}, headers=admin_headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["kind"] == "conflict"

    names = [item["name"] for item in client.get("/api/packages", headers=tech_headers).json()]
    assert "Ceramic Coat" in names

    deleted = client.delete(f"/api/packages/{created.json()['id']}", headers=admin_headers)
    assert deleted.json() == {"message": "Package deleted successfully"}


def test_product_defaults_width(product):
    assert product["widthMm"] == 1520


def test_roll_reports_remaining_length(roll, product):
    assert roll["remainingLengthMm"] == 1000
    assert roll["status"] == "active"
    assert roll["product"]["id"] == product["id"]


def test_roll_used_over_total_is_rejected(client, admin_headers, product):
    response = client.post(
        "/api/ppf-rolls",
        json={"rollId": "XP-002", "productId": product["id"], "totalLengthMm": 100, "usedLengthMm": 200},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_technician_can_patch_roll(client, tech_headers, roll):
    response = client.patch(f"/api/ppf-rolls/{roll['id']}", json={"batchNo": "B-17"}, headers=tech_headers)
    assert response.status_code == 200
    assert response.json()["batchNo"] == "B-17"


def test_usage_over_remaining_length_is_rejected(client, tech_headers, roll):
    job = client.post("/api/jobs", json=JOB_BODY, headers=tech_headers).json()
    assert job["vehicleYear"] == "2024"

    rejected = client.post(
        f"/api/jobs/{job['id']}/ppf-usage",
        json={"panelName": "Bonnet", "rollId": roll["id"], "lengthUsedMm": 1500},
        headers=tech_headers,
    )
    assert rejected.status_code == 400
    assert client.get(f"/api/ppf-rolls/{roll['id']}", headers=tech_headers).json()["usedLengthMm"] == 14000

    accepted = client.post(
        f"/api/jobs/{job['id']}/ppf-usage",
        json={"panelName": "Bonnet", "rollId": "XP-001", "lengthUsedMm": 1000},
        headers=tech_headers,
    )
    assert accepted.status_code == 201
    assert accepted.json()["rollId"] == roll["id"]

    depleted = client.get(f"/api/ppf-rolls/{roll['id']}", headers=tech_headers).json()
    assert depleted["remainingLengthMm"] == 0
    assert depleted["status"] == "depleted"
    assert len(client.get(f"/api/jobs/{job['id']}/ppf-usage", headers=tech_headers).json()) == 1

    removed = client.delete(f"/api/ppf-usage/{accepted.json()['id']}", headers=tech_headers)
    assert removed.status_code == 200
    restored = client.get(f"/api/ppf-rolls/{roll['id']}", headers=tech_headers).json()
    assert restored["usedLengthMm"] == 14000
    assert restored["status"] == "active"


def test_roll_with_usage_cannot_be_deleted(client, admin_headers, tech_headers, roll):
    job = client.post("/api/jobs", json=JOB_BODY, headers=tech_headers).json()
    client.post(
        f"/api/jobs/{job['id']}/ppf-usage",
        json={"panelName": "Fender", "rollId": roll["id"], "lengthUsedMm": 200},
        headers=tech_headers,
    )
    response = client.delete(f"/api/ppf-rolls/{roll['id']}", headers=admin_headers)
    assert response.status_code == 409


def test_users_admin_only_writes(client, admin_headers, tech_headers):
    denied = client.post("/api/users", json={"username": "ravi", "name": "Ravi", "role": "Technician"}, headers=tech_headers)
    assert denied.status_code == 403

    created = client.post("/api/users", json={"username": "ravi", "name": "Ravi", "role": "Technician"}, headers=admin_headers)
    assert created.status_code == 201
    assert [user["username"] for user in client.get("/api/users", headers=tech_headers).json()] == ["ravi"]

    bad_role = client.post("/api/users", json={"username": "x1", "name": "X", "role": "Owner"}, headers=admin_headers)
    assert bad_role.status_code == 400
