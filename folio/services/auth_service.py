"""Admin accounts, password hashing and bearer tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import jwt
from fastapi_users.jwt import decode_jwt, generate_jwt
from fastapi_users.password import PasswordHelper
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from folio.config import settings
from folio.errors import (
    Conflict,
    InvalidCredentials,
    InvalidInput,
    InvalidToken,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from folio.models.admin import Admin
from folio.validation import MIN_PASSWORD_LENGTH, validate_admin

logger = logging.getLogger(__name__)

password_helper = PasswordHelper()

BEARER_SCHEME = "bearer"


def hash_password(plain: str) -> str:
    return password_helper.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    verified, _ = password_helper.verify_and_update(plain, hashed)
    return verified


def extract_token(raw: str | None) -> str | None:
    """Accept either a bare token or an ``Authorization: Bearer`` value."""
    if not raw:
        return None
    scheme, _, rest = raw.strip().partition(" ")
    value = rest.strip() if scheme.lower() == BEARER_SCHEME else raw.strip()
    return value or None


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a verified token."""

    id: str
    username: str
    role: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


def create_access_token(admin: Admin) -> str:
    data = {
        "sub": admin.id,
        "id": admin.id,
        "username": admin.username,
        "role": admin.role,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return generate_jwt(data, settings.secret_key, settings.jwt_lifetime_seconds)


def decode_access_token(token: str | None) -> Identity:
    """Verify signature, expiry, audience and issuer.

    Raises:
        Unauthenticated: no token was supplied
        InvalidToken: any verification step failed
    """
    if not token:
        raise Unauthenticated()
    try:
        claims = decode_jwt(token, settings.secret_key, [settings.jwt_audience])
    except jwt.PyJWTError as exc:
        logger.warning("Token rejected: %s", exc)
        raise InvalidToken() from exc
    if claims.get("iss") != settings.jwt_issuer or not claims.get("sub"):
        logger.warning("Token rejected: issuer or subject mismatch")
        raise InvalidToken()
    return Identity(
        id=claims["sub"],
        username=claims.get("username", ""),
        role=claims.get("role", "admin"),
        claims=claims,
    )


class AuthService:
    """Login, registration and account lookup against the ``admins`` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _find_by_identifier(self, identifier: str) -> Admin | None:
        ident = identifier.strip().lower()
        stmt = select(Admin).where(
            or_(func.lower(Admin.email) == ident, func.lower(Admin.username) == ident)
        )
        return self.db.scalars(stmt).first()

    def login(self, identifier: str | None, password: str | None) -> tuple[str, Admin]:
        """Return ``(token, admin)`` for valid credentials.

        Raises:
            InvalidInput: identifier or password missing
            InvalidCredentials: unknown account or wrong password
        """
        if not identifier or not password:
            raise InvalidInput("Email/username and password are required")

        admin = self._find_by_identifier(identifier)
        if admin is None or not verify_password(password, admin.password_hash):
            logger.warning("Failed login attempt for %s", identifier)
            raise InvalidCredentials()

        logger.info("Admin logged in: %s", admin.username)
        return create_access_token(admin), admin

    def register(
        self, username: str | None, email: str | None, password: str | None
    ) -> Admin:
        if not username or not email or not password:
            raise InvalidInput("Username, email and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        record = {"username": username.strip(), "email": email.strip().lower()}
        errors = validate_admin(record)
        if errors:
            raise ValidationError(errors)

        if self._exists(record["username"], record["email"]):
            raise Conflict("User with this username or email already exists")

        admin = Admin(**record, role="admin")
        self.set_password(admin, password)
        self.db.add(admin)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict("User with this username or email already exists") from exc
        self.db.refresh(admin)
        logger.info("Admin registered: %s", admin.username)
        return admin

    def _exists(self, username: str, email: str) -> bool:
        stmt = select(Admin.id).where(
            or_(
                func.lower(Admin.username) == username.lower(),
                func.lower(Admin.email) == email.lower(),
            )
        )
        return self.db.scalars(stmt).first() is not None

    @staticmethod
    def set_password(admin: Admin, plain: str) -> None:
        """Replace the stored hash; the only place a password is hashed."""
        admin.password_hash = hash_password(plain)

    def resolve(self, identity: Identity) -> Admin:
        admin = self.db.get(Admin, identity.id)
        if admin is None:
            raise NotFound("User not found")
        return admin

    def ensure_admin(self, username: str, email: str, password: str) -> bool:
        """Create the seed account unless it exists. Returns True if created."""
        if self._exists(username, email):
            return False
        self.register(username, email, password)
        return True
