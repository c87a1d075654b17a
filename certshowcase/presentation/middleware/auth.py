"""Session restore, route guards and cookie persistence for the admin surface.

Security features:
- Algorithm allow-list checked before signature verification
- Strict audience and issuer validation
- JWKS cache with TTL and forced refresh on key rotation
- Tokens stored in httpOnly cookies (never readable by page scripts)
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import Request, Response
from jose import JOSEError, JWTError, jwk, jwt

from ...application.ports.outbound import BackendError
from ...application.services.auth_gate import SessionListener
from ...domain.entities import AuthSession, AuthUser
from ...domain.value_objects import AuthEvent

logger = structlog.get_logger()

# Security: Required claims that must be present
REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss"]

# Security: Cookie configuration for secure token storage
ACCESS_TOKEN_COOKIE = "access_token"  # noqa: S105
REFRESH_TOKEN_COOKIE = "refresh_token"  # noqa: S105
TOKEN_COOKIE_MAX_AGE = 3600  # 1 hour for access token
REFRESH_COOKIE_MAX_AGE = 30 * 24 * 3600  # 30 days for refresh token

JWKSFetcher = Callable[[], Awaitable[dict[str, Any]]]


class JWTVerifier:
    """Verifies access tokens issued by the backend's auth service."""

    def __init__(
        self,
        fetch_jwks: JWKSFetcher,
        audience: str,
        issuer: str,
        allowed_algorithms: list[str],
        cache_ttl: int = 3600,
    ):
        # Security: Validate configuration at init time
        if not audience:
            raise ValueError("Audience is required for JWT validation")
        if not issuer:
            raise ValueError("Issuer is required for JWT validation")
        if not allowed_algorithms:
            raise ValueError("At least one signing algorithm must be allowed")

        self._fetch_jwks = fetch_jwks
        self.audience = audience
        self.issuer = issuer
        self._allowed_algorithms = allowed_algorithms
        self._cache_ttl = cache_ttl
        self._jwks_cache: dict[str, Any] | None = None
        self._jwks_cache_time: float = 0

    async def _get_jwks(self, force_refresh: bool = False) -> dict[str, Any]:
        now = time.time()
        if (
            not force_refresh
            and self._jwks_cache
            and (now - self._jwks_cache_time) < self._cache_ttl
        ):
            return self._jwks_cache

        try:
            self._jwks_cache = await self._fetch_jwks()
            self._jwks_cache_time = now
            logger.debug("JWKS cache refreshed")
            return self._jwks_cache
        except BackendError as e:
            logger.error("Failed to fetch JWKS", error=str(e))
            # An expired cache is better than rejecting every session
            if self._jwks_cache:
                logger.warning("Using expired JWKS cache due to fetch failure")
                return self._jwks_cache
            raise JWTError("Unable to fetch JWKS") from e

    async def _get_signing_key(self, token: str) -> dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise JWTError("Invalid token header") from e

        # Security: Reject disallowed algorithms before touching keys
        alg = header.get("alg")
        if alg not in self._allowed_algorithms:
            logger.warning("Token with disallowed algorithm rejected", algorithm=alg)
            raise JWTError(f"Algorithm {alg} not allowed")

        kid = header.get("kid")
        if not kid:
            raise JWTError("Token missing kid header")

        key = _find_key_by_kid(await self._get_jwks(), kid)
        if key:
            return key

        # Key rotation: refresh once before giving up
        logger.info("Key not found in cache, forcing JWKS refresh", kid=kid)
        key = _find_key_by_kid(await self._get_jwks(force_refresh=True), kid)
        if key:
            return key

        raise JWTError(f"Unable to find matching key for kid: {kid}")

    async def verify_token(self, token: str) -> dict[str, Any]:
        """Verify signature, expiry, audience and issuer; return the claims.

        Raises:
            JWTError: the token is not acceptable
        """
        signing_key = await self._get_signing_key(token)
        claims = jwt.decode(
            token,
            jwk.construct(signing_key),
            algorithms=self._allowed_algorithms,
            audience=self.audience,
            issuer=self.issuer,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_iat": True,
                "verify_aud": True,
                "require_exp": True,
                "require_iat": True,
            },
        )

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in claims]
        if missing:
            raise JWTError(f"Missing required claims: {missing}")

        logger.debug("Token verified", sub=claims.get("sub"))
        return claims


def _find_key_by_kid(jwks: dict[str, Any], kid: str) -> dict[str, Any] | None:
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key
    return None


def get_token_from_request(request: Request) -> str | None:
    """Bearer header for API clients, httpOnly cookie for browsers."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def get_refresh_token_from_cookie(request: Request) -> str | None:
    return request.cookies.get(REFRESH_TOKEN_COOKIE)


async def restore_session(
    verifier: JWTVerifier,
    access_token: str | None,
    refresh_token: str | None = None,
) -> AuthSession | None:
    """Rebuild the session carried by a request, or None if there is no valid one."""
    if not access_token:
        return None

    try:
        claims = await verifier.verify_token(access_token)
    except JOSEError as e:
        # Also covers JWKError from a malformed key set entry
        logger.info("Stored session rejected", error=str(e))
        return None

    return AuthSession(
        user=AuthUser(id=claims["sub"], email=claims.get("email")),
        access_token=access_token,
        refresh_token=refresh_token,
    )


# =============================================================================
# Secure Token Storage (httpOnly Cookies)
# =============================================================================


def set_auth_cookies(
    response: Response,
    access_token: str,
    refresh_token: str | None = None,
    secure: bool = True,
) -> None:
    """Set authentication tokens in httpOnly, SameSite=Lax cookies."""
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        max_age=TOKEN_COOKIE_MAX_AGE,
        httponly=True,
        secure=secure,
        samesite="lax",
        path="/",
    )

    if refresh_token:
        response.set_cookie(
            key=REFRESH_TOKEN_COOKIE,
            value=refresh_token,
            max_age=REFRESH_COOKIE_MAX_AGE,
            httponly=True,
            secure=secure,
            samesite="lax",
            path="/",
        )

    logger.debug("Auth cookies set")


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE, path="/", httponly=True, samesite="lax")
    response.delete_cookie(key=REFRESH_TOKEN_COOKIE, path="/", httponly=True, samesite="lax")
    logger.debug("Auth cookies cleared")


def cookie_persistence(response: Response, secure: bool = True) -> SessionListener:
    """Session listener that mirrors session changes into ``response`` cookies."""

    def listener(event: AuthEvent, session: AuthSession | None) -> None:
        if event in (AuthEvent.SIGNED_IN, AuthEvent.TOKEN_REFRESHED) and session:
            set_auth_cookies(
                response,
                access_token=session.access_token,
                refresh_token=session.refresh_token,
                secure=secure,
            )
        elif event is AuthEvent.SIGNED_OUT:
            clear_auth_cookies(response)

    return listener
