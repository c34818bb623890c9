"""Admin login, registration and token checks."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from folio.auth import require_admin
from folio.config import settings
from folio.database import get_db
from folio.errors import RegistrationDisabled
from folio.schemas.auth import AdminOut, AuthResponse, LoginRequest, RegisterRequest
from folio.schemas.common import MessageResponse
from folio.security import limiter
from folio.services.auth_service import AuthService, Identity, create_access_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/login", response_model=AuthResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    token, admin = service.login(payload.email or payload.username, payload.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=AdminOut.model_validate(admin),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit("5/minute")
def register(
    request: Request,
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    if not settings.registration_enabled:
        raise RegistrationDisabled()
    admin = service.register(payload.username, payload.email, payload.password)
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(admin),
        user=AdminOut.model_validate(admin),
    )


@router.get("/verify", response_model=AuthResponse)
def verify(
    identity: Identity = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
):
    """Confirm the caller's token and return the account it belongs to."""
    admin = service.resolve(identity)
    return AuthResponse(message="Token is valid", user=AdminOut.model_validate(admin))


@router.post("/logout", response_model=MessageResponse)
def logout(identity: Identity = Depends(require_admin)):
    # Tokens are stateless; the client discards its copy
    return MessageResponse(message="Logged out successfully")
