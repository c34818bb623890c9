from __future__ import annotations

from starlette.requests import Request


def client_ip(request: Request) -> str | None:
    # First hop of X-Forwarded-For when behind a proxy
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None
