from urllib.parse import quote

import structlog

from ...application.ports.outbound.errors import StorageError
from .client import BackendClient

logger = structlog.get_logger()


class StorageBucket:
    """Object storage bucket with public read access."""

    def __init__(
        self,
        client: BackendClient,
        bucket: str,
        access_token: str | None = None,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._access_token = access_token

    async def upload(
        self,
        key: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """Upload ``content`` under ``key``. Existing objects are not overwritten."""
        await self._client.request(
            "POST",
            f"/storage/v1/object/{self._bucket}/{quote(key)}",
            access_token=self._access_token,
            content=content,
            headers={
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "false",
            },
            error_cls=StorageError,
        )
        logger.info("Object uploaded", bucket=self._bucket, key=key, size=len(content))
        return key

    def get_public_url(self, key: str) -> str:
        return self._client.url(f"/storage/v1/object/public/{self._bucket}/{quote(key)}")
