"""FastAPI middleware for response security headers."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds baseline security headers to every response.

    Headers already present on the response are left untouched.

    Args:
        app: ASGI application.
        headers: Header name/value pairs to add.
    """

    def __init__(
        self, app: object, headers: dict[str, str] | None = None
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._headers = dict(headers or DEFAULT_SECURITY_HEADERS)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers.setdefault(name, value)
        return response
