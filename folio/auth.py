"""Authorization gate for protected routes."""

from __future__ import annotations

from fastapi import Header, Request

from folio.services.auth_service import Identity, decode_access_token, extract_token


def require_admin(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Identity:
    """Verify the bearer token and attach the identity to the request.

    Raises ``Unauthenticated`` when no token is sent and ``InvalidToken`` when
    verification fails; both render as 403.
    """
    identity = decode_access_token(extract_token(authorization))
    request.state.identity = identity
    return identity
