from typing import Any

import structlog

from ...application.ports.outbound.errors import AuthProviderError, BackendResponseError
from ..logging import sanitize_for_logging
from .client import BackendClient, response_json

logger = structlog.get_logger()

SESSION_FIELDS = ("access_token", "refresh_token", "user")


class AuthApi:
    """Calls against the backend's auth endpoint (password grant, refresh, logout)."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        logger.info("Password sign-in requested", email=sanitize_for_logging(email, 3))
        response = await self._client.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            error_cls=AuthProviderError,
        )
        return self._session_payload(response_json(response))

    async def refresh(self, refresh_token: str) -> dict[str, Any]:
        response = await self._client.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
            error_cls=AuthProviderError,
        )
        return self._session_payload(response_json(response))

    async def sign_out(self, access_token: str) -> None:
        await self._client.request(
            "POST",
            "/auth/v1/logout",
            access_token=access_token,
            error_cls=AuthProviderError,
        )

    async def fetch_jwks(self) -> dict[str, Any]:
        response = await self._client.request("GET", "/auth/v1/.well-known/jwks.json")
        body = response_json(response)
        if not isinstance(body, dict) or not isinstance(body.get("keys"), list):
            raise BackendResponseError("JWKS response has no key list")
        return body

    def _session_payload(self, body: Any) -> dict[str, Any]:
        if not isinstance(body, dict) or any(field not in body for field in SESSION_FIELDS):
            raise BackendResponseError("Auth response is missing session fields")
        return body
