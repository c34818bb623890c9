"""Security façade for rate limiting, client metadata and headers middleware."""

from folio.middleware.security import SecurityHeadersMiddleware  # noqa: F401

from .rate_limit import limiter  # noqa: F401
from .utils import client_ip  # noqa: F401

__all__ = [
    "client_ip",
    "limiter",
    "SecurityHeadersMiddleware",
]
