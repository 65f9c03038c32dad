"""
HTTP tests for registration, login and bearer-token handling.
"""

import pytest
from pydantic import ValidationError

from finance_ledger_api.app.models import User
from finance_ledger_api.app.schemas.user import AuthResponse


class TestRegister:

    def test_register_returns_token(self, client):
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": "John Doe", "email": "john@example.com", "password": "Password@123"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User registered successfully"
        assert body["token"]

    def test_password_is_stored_hashed(self, client, deps, register):
        register("john@example.com", password="Password@123")
        user = deps.users.find_by_email("john@example.com")
        assert user.password_hash != "Password@123"
        assert deps.credentials.verify("john@example.com", "Password@123")

    def test_duplicate_email_conflict(self, client, register):
        register("john@example.com")
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": "John Again", "email": "john@example.com", "password": "Password@123"},
        )
        assert resp.status_code == 409
        body = resp.json()
        assert body["error"] == "CONFLICT"
        assert body["message"] == "Email already in use"
        assert "token" not in body

    def test_missing_fields_are_validation_errors(self, client):
        resp = client.post("/api/v1/auth/register", json={"email": "john@example.com"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Validation failed"
        assert set(body["fields"]) == {"name", "password"}

    def test_invalid_email_and_short_password(self, client):
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": "John", "email": "not-an-email", "password": "123"},
        )
        assert resp.status_code == 400
        assert set(resp.json()["fields"]) == {"email", "password"}

    def test_blank_name_rejected(self, client):
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": "   ", "email": "john@example.com", "password": "Password@123"},
        )
        assert resp.status_code == 400
        assert "name" in resp.json()["fields"]


class TestLogin:

    def test_login_success_returns_usable_token(self, client, register):
        register("john@example.com", password="Password@123")
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "john@example.com", "password": "Password@123"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login successful"
        headers = {"Authorization": f"Bearer {body['token']}"}
        assert client.get("/api/v1/transactions", headers=headers).status_code == 200

    def test_login_email_is_stripped_like_registration(self, client, register):
        register(" john@example.com ", password="Password@123")
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": " john@example.com", "password": "Password@123"},
        )
        assert resp.status_code == 200
        assert resp.json()["token"]

    def test_wrong_password_unauthenticated(self, client, register):
        register("john@example.com", password="Password@123")
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "john@example.com", "password": "wrong-password"},
        )
        assert resp.status_code == 401
        assert resp.json()["error"] == "UNAUTHENTICATED"
        assert resp.json()["message"] == "Invalid email or password"

    def test_unknown_email_gives_same_answer(self, client):
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "whatever"},
        )
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid email or password"


class TestBearerToken:

    def test_no_header(self, client):
        resp = client.get("/api/v1/transactions")
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    def test_invalid_header_format(self, client):
        resp = client.get("/api/v1/transactions", headers={"Authorization": "InvalidTokenFormat"})
        assert resp.status_code == 401

    def test_wrong_scheme(self, client, deps):
        token = deps.credentials.issue_token("john@example.com")
        resp = client.get("/api/v1/transactions", headers={"Authorization": f"Basic {token}"})
        assert resp.status_code == 401

    def test_invalid_token(self, client):
        resp = client.get("/api/v1/transactions", headers={"Authorization": "Bearer abc.def.ghi"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid or expired token"

    def test_token_for_unknown_user(self, client, deps):
        token = deps.credentials.issue_token("ghost@example.com")
        resp = client.get("/api/v1/transactions", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "User no longer exists"

    def test_valid_token_for_existing_user(self, client, deps):
        deps.users.save(User(None, "John", "john@example.com", "x$y"))
        token = deps.credentials.issue_token("john@example.com")
        resp = client.get("/api/v1/transactions", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json() == []


class TestAuthResponse:

    def test_token_is_required(self):
        with pytest.raises(ValidationError):
            AuthResponse(message="Login successful")
