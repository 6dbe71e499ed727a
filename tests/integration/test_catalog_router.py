from fastapi.testclient import TestClient

def test_get_event_packages_defaults(client: TestClient):
    r = client.get("/api/config/event-packages")

    assert r.status_code == 200
    assert r.json() == {
        "packages": [
            {"id": "10000", "basePrice": 10000},
            {"id": "999", "basePrice": 999},
            {"id": "500", "basePrice": 500},
        ]
    }

def test_get_event_packages_stored(client: TestClient, monkeypatch):
    monkeypatch.setattr(
        "eventpay.catalog.service.repository.get_config_value",
        lambda key: [{"id": "vip", "basePrice": 2500}],
    )
    r = client.get("/api/config/event-packages")

    assert r.json() == {"packages": [{"id": "vip", "basePrice": 2500}]}

def test_update_event_packages_requires_admin(client: TestClient):
    r = client.post("/api/config/event-packages", json={"packages": [{"id": "vip", "basePrice": 2500}]})

    assert r.status_code == 401

def test_update_event_packages(authenticated_admin_client: TestClient, monkeypatch):
    written = {}
    monkeypatch.setattr(
        "eventpay.catalog.service.repository.upsert_config_value",
        lambda key, value: written.setdefault(key, value),
    )
    r = authenticated_admin_client.post("/api/config/event-packages", json={"packages": [{"id": "vip", "basePrice": 2500}]})

    assert r.status_code == 200
    assert r.json() == {"packages": [{"id": "vip", "basePrice": 2500}]}
    assert written == {"event_packages": [{"id": "vip", "basePrice": 2500}]}

def test_update_event_packages_invalid(authenticated_admin_client: TestClient):
    r = authenticated_admin_client.post("/api/config/event-packages", json={"packages": []})

    assert r.status_code == 400
    assert r.json()["success"] is False

def test_new_package_is_orderable(authenticated_admin_client: TestClient, monkeypatch):
    store = {}
    monkeypatch.setattr("eventpay.catalog.service.repository.upsert_config_value", lambda key, value: store.setdefault(key, value))
    monkeypatch.setattr("eventpay.catalog.service.repository.get_config_value", lambda key: store.get(key))
    authenticated_admin_client.post("/api/config/event-packages", json={"packages": [{"id": "vip", "basePrice": 2500}]})

    r = authenticated_admin_client.get("/api/payments/price-breakdown/vip")
    assert r.json()["totalAmount"] == 2950
    assert authenticated_admin_client.get("/api/payments/price-breakdown/999").status_code == 400
