import pytest
from typing import Generator, Any, Dict, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from eventpay.app import app as fastapi_app
from eventpay.utils.security import require_admin

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

class FakeResponse:
    def __init__(self, data: Optional[Any] = None):
        self.data = data if data is not None else []

def make_supabase(data: Optional[List[Dict[str, Any]]] = None) -> MagicMock:
    """
    Client Supabase factice: chaque méthode du query builder renvoie le même objet,
    execute() renvoie FakeResponse(data). Par défaut aucune ligne.
    """
    client = MagicMock()
    query = MagicMock()
    client.table.return_value = query
    for name in ("select", "insert", "update", "upsert", "delete", "eq", "neq", "order", "limit"):
        getattr(query, name).return_value = query
    query.not_.is_.return_value = query
    query.execute.return_value = FakeResponse(data)
    return client

@pytest.fixture
def fake_supabase():
    """Fabrique de clients factices: fake_supabase(data=[...])."""
    return make_supabase

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

ADMIN_USER = {"id": "admin-user-id", "email": "admin@example.com", "role": "admin", "metadata": {"role": "admin"}}

@pytest.fixture
def authenticated_admin_client(app, client):
    app.dependency_overrides[require_admin] = lambda: ADMIN_USER
    yield client
    app.dependency_overrides.pop(require_admin, None)

@pytest.fixture(autouse=True)
def razorpay_credentials(monkeypatch):
    """Identifiants Razorpay de test (la signature attendue dépend du secret)."""
    monkeypatch.setattr("eventpay.config.RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setattr("eventpay.config.RAZORPAY_KEY_SECRET", "rzp_test_secret")

# Aucun accès réseau à Supabase pendant les tests
@pytest.fixture(scope="function", autouse=True)
def mock_db_dependency(monkeypatch):
    monkeypatch.setattr("eventpay.infra.supabase_client.get_supabase", lambda: make_supabase())
    monkeypatch.setattr("eventpay.infra.supabase_client.get_service_supabase", lambda: make_supabase())
