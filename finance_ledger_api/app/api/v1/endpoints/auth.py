"""
Registration and login endpoints.

Both return a bearer token that clients send back as
``Authorization: Bearer <token>``.
"""

from fastapi import APIRouter, Depends, status

from finance_ledger_api.app.dependencies import Dependencies, get_deps
from finance_ledger_api.app.schemas.user import AuthResponse, LoginRequest, RegisterRequest


router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, deps: Dependencies = Depends(get_deps)) -> AuthResponse:
    """Register a new user.

    Responds ``409`` when the email is already registered.
    """
    token = deps.user_service.register(body.name, body.email, body.password).unwrap()
    return AuthResponse(token=token, message="User registered successfully")


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, deps: Dependencies = Depends(get_deps)) -> AuthResponse:
    """Exchange email and password for a fresh token; ``401`` on mismatch."""
    token = deps.user_service.login(body.email, body.password).unwrap()
    return AuthResponse(token=token, message="Login successful")
