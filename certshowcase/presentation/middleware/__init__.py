from .auth import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    JWTVerifier,
    clear_auth_cookies,
    cookie_persistence,
    get_refresh_token_from_cookie,
    get_token_from_request,
    restore_session,
    set_auth_cookies,
)
from .correlation import CorrelationIdMiddleware
from .csrf import CSRFMiddleware
from .request_validation import FORM_OVERHEAD, RequestSizeLimitMiddleware, SecurityHeadersMiddleware

__all__ = [
    "ACCESS_TOKEN_COOKIE",
    "CSRFMiddleware",
    "CorrelationIdMiddleware",
    "FORM_OVERHEAD",
    "JWTVerifier",
    "REFRESH_TOKEN_COOKIE",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "clear_auth_cookies",
    "cookie_persistence",
    "get_refresh_token_from_cookie",
    "get_token_from_request",
    "restore_session",
    "set_auth_cookies",
]
