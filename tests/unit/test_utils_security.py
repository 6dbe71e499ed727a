from fastapi import FastAPI, Depends
from fastapi.testclient import TestClient

from eventpay.utils.security import get_current_user, require_admin

def _make_app():
    app = FastAPI()

    @app.get("/me")
    def me(user=Depends(get_current_user)):
        return user

    @app.get("/admin")
    def admin(user=Depends(require_admin)):
        return {"ok": True}

    return app

def _token_service(monkeypatch, fn):
    monkeypatch.setattr("eventpay.auth.service.get_user_from_token", fn)

def test_get_current_user_bearer_success(monkeypatch):
    _token_service(monkeypatch, lambda token: {"id": "u1", "email": "a@b", "role": "user"})
    client = TestClient(_make_app())

    r = client.get("/me", headers={"Authorization": "Bearer tok-123"})
    assert r.status_code == 200
    assert r.json() == {"id": "u1", "email": "a@b", "role": "user"}

def test_get_current_user_missing_token_401(monkeypatch):
    _token_service(monkeypatch, lambda token: {"id": "u1"})
    client = TestClient(_make_app())

    r = client.get("/me")
    assert r.status_code == 401
    assert "no token" in r.text

def test_get_current_user_missing_id_401(monkeypatch):
    _token_service(monkeypatch, lambda token: {"email": "x@y"})
    client = TestClient(_make_app())

    r = client.get("/me", headers={"Authorization": "Bearer tok"})
    assert r.status_code == 401
    assert "token failed" in r.text

def test_get_current_user_invalid_token_401(monkeypatch):
    def _raise(token):
        raise ValueError("bad signature")

    _token_service(monkeypatch, _raise)
    client = TestClient(_make_app())

    r = client.get("/me", headers={"Authorization": "Bearer tok"})
    assert r.status_code == 401

def test_require_admin_forbidden_and_allowed(monkeypatch):
    client = TestClient(_make_app())

    _token_service(monkeypatch, lambda token: {"id": "u1", "role": "user"})
    r_forbidden = client.get("/admin", headers={"Authorization": "Bearer tok"})
    assert r_forbidden.status_code == 403

    _token_service(monkeypatch, lambda token: {"id": "u1", "role": "admin"})
    r_ok = client.get("/admin", headers={"Authorization": "Bearer tok"})
    assert r_ok.status_code == 200
    assert r_ok.json() == {"ok": True}
