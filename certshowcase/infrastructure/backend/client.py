"""HTTP client for the hosted backend (REST tables, object storage, auth).

One ``httpx.AsyncClient`` is shared per process. Every request carries the
project's anon key; calls made on behalf of a signed-in user send that
user's access token as the bearer so row-level policies apply.
"""

from typing import Any

import httpx
import structlog

from ...application.ports.outbound.errors import BackendError, BackendResponseError
from ..logging import Timer

logger = structlog.get_logger()


def error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the backend's error wording."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return response.text or response.reason_phrase or f"HTTP {response.status_code}"


def response_json(response: httpx.Response) -> Any:
    """Decode a successful response body, which must be JSON."""
    try:
        return response.json()
    except ValueError as e:
        logger.warning(
            "Backend returned a non-JSON body",
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type"),
        )
        raise BackendResponseError(
            f"Backend returned a non-JSON body (HTTP {response.status_code})",
            status_code=response.status_code,
        ) from e


class BackendClient:
    """Thin request builder over the backend's REST surface."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
        }

    async def request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        params: Any = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        error_cls: type[BackendError] = BackendError,
    ) -> httpx.Response:
        """Send a request and raise ``error_cls`` on transport or HTTP errors."""
        request_headers = self.headers(access_token)
        if headers:
            request_headers.update(headers)

        try:
            with Timer() as t:
                response = await self._http.request(
                    method,
                    self.url(path),
                    params=params,
                    json=json,
                    content=content,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            logger.error(
                "Backend request failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise error_cls(f"Backend unreachable: {type(e).__name__}") from e

        logger.debug(
            "Backend request",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=t.duration_ms,
        )

        if response.is_error:
            message = error_message(response)
            logger.warning(
                "Backend returned error status",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise error_cls(message, status_code=response.status_code)

        return response

    async def aclose(self) -> None:
        await self._http.aclose()
