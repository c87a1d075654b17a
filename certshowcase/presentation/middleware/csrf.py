"""CSRF protection for cookie-authenticated writes.

Double Submit Cookie pattern with signed, time-limited tokens: a GET sets a
``csrf_token`` cookie, and every POST/PUT/PATCH/DELETE must echo that value
in the ``X-CSRF-Token`` header. Sign-in is exempt because the visitor has no
session to forge yet.
"""

import hashlib
import hmac
import secrets
import time
from typing import Any

import structlog
from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_TOKEN_BYTES = 32
CSRF_TOKEN_TTL = 3600  # 1 hour

PROTECTED_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
DEFAULT_EXEMPT_PATHS = frozenset(
    {"/health", "/health/ready", "/openapi.json", "/api/v1/auth/sign-in"}
)
# Listing views hold no credentials, only a visitor's filter selection
DEFAULT_EXEMPT_PREFIXES = ("/docs", "/redoc", "/api/v1/listing-views")


class CSRFMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: Any,
        secret_key: str,
        secure_cookies: bool = True,
        exempt_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._secret_key = secret_key.encode()
        self._secure_cookies = secure_cookies
        self._exempt_paths = set(DEFAULT_EXEMPT_PATHS) | (exempt_paths or set())

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        path = request.url.path

        if request.method not in PROTECTED_METHODS:
            response = await call_next(request)
            if request.method == "GET" and not self._is_exempt(path):
                self._set_csrf_cookie(response)
            return response

        if self._is_exempt(path):
            return await call_next(request)

        if not self._validate_csrf(request):
            logger.warning("CSRF validation failed", path=path, method=request.method)
            # BaseHTTPMiddleware bypasses exception handlers, so answer directly
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"detail": "CSRF token missing or invalid"},
            )

        response = await call_next(request)
        self._set_csrf_cookie(response)
        return response

    def _is_exempt(self, path: str) -> bool:
        return path in self._exempt_paths or path.startswith(DEFAULT_EXEMPT_PREFIXES)

    def _sign(self, message: str) -> str:
        return hmac.new(self._secret_key, message.encode(), hashlib.sha256).hexdigest()[:16]

    def generate_token(self) -> str:
        """Random value, issue time and signature joined by dots."""
        message = f"{secrets.token_hex(CSRF_TOKEN_BYTES)}.{int(time.time())}"
        return f"{message}.{self._sign(message)}"

    def validate_token(self, token: str) -> bool:
        parts = token.split(".")
        if len(parts) != 3:
            return False
        random_hex, issued_at, signature = parts

        if not hmac.compare_digest(signature, self._sign(f"{random_hex}.{issued_at}")):
            return False
        try:
            return time.time() - int(issued_at) <= CSRF_TOKEN_TTL
        except ValueError:
            return False

    def _validate_csrf(self, request: Request) -> bool:
        cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
        header_token = request.headers.get(CSRF_HEADER_NAME)
        if not cookie_token or not header_token:
            return False
        if not hmac.compare_digest(cookie_token, header_token):
            return False
        return self.validate_token(cookie_token)

    def _set_csrf_cookie(self, response: Response) -> None:
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=self.generate_token(),
            max_age=CSRF_TOKEN_TTL,
            httponly=False,  # page scripts read it to fill the header
            secure=self._secure_cookies,
            samesite="strict",
            path="/",
        )
