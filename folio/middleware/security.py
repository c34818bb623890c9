from __future__ import annotations

from collections.abc import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Interactive docs pull their assets from a CDN
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


def _is_secure_request(request: Request) -> bool:
    # Honor reverse proxy headers if present
    xf_proto = request.headers.get("x-forwarded-proto")
    if xf_proto:
        return "https" in xf_proto
    return request.url.scheme == "https"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Sets a hardened set of security headers on every API response.
    - HTTPS-aware HSTS
    - Deny-all CSP (JSON responses never load subresources)
    - Modern cross-origin protections
    """

    def __init__(
        self,
        app,
        *,
        csp_directives: Iterable[str] | None = None,
        extra_csp: str | None = None,
        hsts: str = "max-age=63072000; includeSubDomains",
        referrer_policy: str = "no-referrer",
        permissions_policy: str = "geolocation=(), microphone=(), camera=()",
        add_coop_corp: bool = True,
        enable_hsts_on_http: bool = False,  # leave False: avoid HSTS in dev/http
        skip_hsts_hosts: set[str] | None = None,
        frame_options: str = "DENY",
        exempt_paths: Iterable[str] = DOCS_PATHS,
    ) -> None:
        super().__init__(app)
        self.hsts = hsts
        self.referrer_policy = referrer_policy
        self.permissions_policy = permissions_policy
        self.add_coop_corp = add_coop_corp
        self.enable_hsts_on_http = enable_hsts_on_http
        self.skip_hsts_hosts = skip_hsts_hosts or {"localhost", "127.0.0.1"}
        self.frame_options = frame_options
        self.exempt_paths = tuple(exempt_paths)

        directives = list(
            csp_directives or ["default-src 'none'", "frame-ancestors 'none'"]
        )
        if extra_csp:
            directives.append(extra_csp.strip())
        self.csp_value = "; ".join(directives)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if not request.url.path.startswith(self.exempt_paths):
            response.headers.setdefault("Content-Security-Policy", self.csp_value)

        # HSTS: only on HTTPS and non-dev hosts unless explicitly enabled
        if _is_secure_request(request) or self.enable_hsts_on_http:
            if request.url.hostname not in self.skip_hsts_hosts:
                response.headers.setdefault("Strict-Transport-Security", self.hsts)

        response.headers.setdefault("Referrer-Policy", self.referrer_policy)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", self.frame_options)

        if self.add_coop_corp:
            response.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
            response.headers.setdefault("Cross-Origin-Resource-Policy", "same-site")

        if self.permissions_policy:
            response.headers.setdefault("Permissions-Policy", self.permissions_policy)

        return response
