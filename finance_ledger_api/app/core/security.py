"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
the user's email as the ``sub`` claim and an expiration timestamp
(``exp``).  Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a random
salt.

``CredentialService`` bundles both concerns behind the contract the
rest of the application relies on: ``verify``, ``issue_token`` and
``validate_token``.  ``get_current_user`` is the FastAPI dependency
that turns a bearer token into a ``User``.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import AppError, ErrorKind
from ..models import User
from ..stores.user_store import UserStore


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], secret: str, expires_in: int) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field ``expires_in``
    seconds from now.  The token has the form
    ``header.payload.signature`` with each part base64url encoded.
    """
    to_encode = dict(data)
    to_encode["exp"] = int(time.time()) + expires_in
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: str) -> Optional[Dict[str, object]]:
    """Verify and decode a JWT token.

    Returns the payload when the signature matches and ``exp`` lies in
    the future; otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, secret)
        # Constant‑time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Returns ``"<salt hex>$<hash hex>"`` with a fresh 16‑byte salt.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``salt$hash`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


class CredentialService:
    """Verifies passwords and issues/validates bearer tokens bound to an email."""

    def __init__(self, users: UserStore, secret_key: str, token_ttl_seconds: int) -> None:
        self.users = users
        self.secret_key = secret_key
        self.token_ttl_seconds = token_ttl_seconds

    def verify(self, email: str, password: str) -> bool:
        user = self.users.find_by_email(email)
        if user is None:
            return False
        return verify_password(password, user.password_hash)

    def issue_token(self, email: str) -> str:
        return create_access_token({"sub": email}, self.secret_key, self.token_ttl_seconds)

    def validate_token(self, token: str) -> Optional[str]:
        """Return the email a token was issued for, or ``None`` if it is invalid or expired."""
        payload = decode_access_token(token, self.secret_key)
        if not payload:
            return None
        subject = payload.get("sub")
        return subject if isinstance(subject, str) else None


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Dependency that resolves the caller from the ``Authorization`` header.

    A missing header, a scheme other than ``Bearer``, an invalid or
    expired token and a token whose subject no longer exists all end
    in ``401 Unauthorized``.
    """
    if credentials is None:
        raise AppError(ErrorKind.UNAUTHENTICATED, "Not authenticated")
    deps = request.app.state.deps
    email = deps.credentials.validate_token(credentials.credentials)
    if email is None:
        raise AppError(ErrorKind.UNAUTHENTICATED, "Invalid or expired token")
    user = deps.users.find_by_email(email)
    if user is None:
        logger.warning("Token presented for unknown user %s", email)
        raise AppError(ErrorKind.UNAUTHENTICATED, "User no longer exists")
    return user
