import pytest

import eventpay.__main__ as entrypoint
import eventpay.infra.supabase_client as supabase_client

@pytest.fixture
def fresh_clients(monkeypatch):
    monkeypatch.setattr(supabase_client, "_clients", {})
    monkeypatch.setattr("eventpay.config.SUPABASE_URL", "https://demo.supabase.co")

def test_client_is_created_once_per_role(monkeypatch, fresh_clients):
    created = []
    monkeypatch.setattr(supabase_client, "create_client", lambda url, key: created.append((url, key)) or object())

    first = supabase_client._client("service", "service-key")
    second = supabase_client._client("service", "service-key")

    assert first is second
    assert created == [("https://demo.supabase.co", "service-key")]

def test_client_without_key_raises(fresh_clients):
    with pytest.raises(RuntimeError):
        supabase_client._client("service", "")

def test_main_runs_uvicorn_with_env(monkeypatch):
    calls = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("UVICORN_RELOAD", "true")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    entrypoint.main()

    app, kw = calls[0]
    assert app == "eventpay.asgi:app"
    assert kw["port"] == 9001
    assert kw["reload"] is True
    assert kw["log_level"] == "debug"
