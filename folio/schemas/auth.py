from __future__ import annotations

from datetime import datetime

from folio.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Either ``email`` or ``username`` identifies the account."""

    email: str | None = None
    username: str | None = None
    password: str | None = None


class RegisterRequest(CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class AdminOut(CamelModel):
    id: str
    username: str
    email: str
    role: str
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str | None = None
    user: AdminOut
