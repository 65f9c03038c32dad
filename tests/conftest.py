"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` and its own
application instance; nothing is shared between tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from finance_ledger_api.app.core.config import Settings
from finance_ledger_api.app.dependencies import build_dependencies
from finance_ledger_api.app.main import create_app
from finance_ledger_api.app.models import User


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "ledger.db"),
        secret_key="test-secret",
        access_token_expire_minutes=5,
    )


@pytest.fixture
def deps(settings):
    deps = build_dependencies(settings)
    deps.database.init()
    return deps


@pytest.fixture
def make_user(deps):
    def _make(email: str, name: str = "Test User") -> User:
        return deps.users.save(User(id=None, name=name, email=email, password_hash="x$y"))
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com", "Alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com", "Bob")


@pytest.fixture
def app(settings, deps):
    return create_app(settings, deps)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    """Register a user over HTTP and return auth headers for it."""
    def _register(email: str, password: str = "Password@123", name: str = "John Doe") -> dict:
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}
    return _register


@pytest.fixture
def txn_payload():
    """Build a JSON body for create/update requests."""
    def _payload(amount="100.00", category="Expense", description="Groceries", on=date(2025, 6, 22)):
        return {
            "amount": str(Decimal(amount)),
            "description": description,
            "category": category,
            "date": on.isoformat(),
        }
    return _payload
