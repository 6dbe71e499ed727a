import pytest

from eventpay.catalog import service as catalog_service
from eventpay.catalog.models import DEFAULT_EVENT_PACKAGES
from eventpay.errors import PersistenceError, ValidationError

def _stored(monkeypatch, value):
    monkeypatch.setattr("eventpay.catalog.service.repository.get_config_value", lambda key: value)

def test_empty_store_returns_defaults(monkeypatch):
    _stored(monkeypatch, None)
    packages = catalog_service.list_valid_packages()
    assert [(p.id, p.base_price) for p in packages] == [("10000", 10000), ("999", 999), ("500", 500)]

def test_non_list_value_returns_defaults(monkeypatch):
    _stored(monkeypatch, {"id": "999"})
    assert catalog_service.list_valid_packages() == list(DEFAULT_EVENT_PACKAGES)

def test_malformed_entries_are_skipped(monkeypatch):
    _stored(monkeypatch, [{"id": "vip", "basePrice": 2500}, {"id": "", "basePrice": 10}, "junk", {"id": "x"}])
    packages = catalog_service.list_valid_packages()
    assert [(p.id, p.base_price) for p in packages] == [("vip", 2500)]

def test_only_malformed_entries_returns_defaults(monkeypatch):
    _stored(monkeypatch, [{"basePrice": 10}])
    assert catalog_service.list_valid_packages() == list(DEFAULT_EVENT_PACKAGES)

def test_numeric_ids_are_normalised(monkeypatch):
    _stored(monkeypatch, [{"id": 999, "basePrice": 999}])
    assert catalog_service.is_valid_package("999")

def test_storage_error_degrades_to_defaults(monkeypatch):
    def _boom():
        raise RuntimeError("supabase down")
    monkeypatch.setattr("eventpay.infra.supabase_client.get_supabase", _boom)
    assert catalog_service.list_valid_packages() == list(DEFAULT_EVENT_PACKAGES)

def test_catalog_is_read_on_every_call(monkeypatch):
    values = iter([[{"id": "a", "basePrice": 1}], [{"id": "b", "basePrice": 2}]])
    monkeypatch.setattr("eventpay.catalog.service.repository.get_config_value", lambda key: next(values))
    assert catalog_service.is_valid_package("a")
    assert not catalog_service.is_valid_package("a")

def test_get_package_unknown(monkeypatch):
    _stored(monkeypatch, None)
    assert catalog_service.get_package("invalid") is None
    assert catalog_service.get_package("999").base_price == 999

def test_update_packages_writes_public_shape(monkeypatch):
    written = {}

    def _upsert(key, value):
        written[key] = value
        return {"key": key, "value": value}

    monkeypatch.setattr("eventpay.catalog.service.repository.upsert_config_value", _upsert)
    entries = catalog_service.update_packages([{"id": "vip", "basePrice": 2500}])
    assert [e.id for e in entries] == ["vip"]
    assert written == {"event_packages": [{"id": "vip", "basePrice": 2500}]}

@pytest.mark.parametrize(
    "raw",
    [
        None,
        [],
        [{"id": "vip", "basePrice": -5}],
        [{"id": "vip", "basePrice": 1}, {"id": "vip", "basePrice": 2}],
    ],
)
def test_update_packages_rejects_invalid(raw, monkeypatch):
    monkeypatch.setattr(
        "eventpay.catalog.service.repository.upsert_config_value",
        lambda key, value: pytest.fail("should not write"),
    )
    with pytest.raises(ValidationError):
        catalog_service.update_packages(raw)

def test_update_packages_write_failure(monkeypatch):
    monkeypatch.setattr("eventpay.catalog.service.repository.upsert_config_value", lambda key, value: None)
    with pytest.raises(PersistenceError):
        catalog_service.update_packages([{"id": "vip", "basePrice": 2500}])
