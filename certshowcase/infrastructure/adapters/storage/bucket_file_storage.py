import time
from collections.abc import Callable

from ....application.ports.outbound import Attachment, FileStorage
from ...backend import StorageBucket


def attachment_key(filename: str, now_ms: int) -> str:
    """Object key for an upload: millisecond timestamp plus the original name.

    No uniqueness check is made; two uploads of the same name in the same
    millisecond would collide.
    """
    return f"{now_ms}-{filename}"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class BucketFileStorage(FileStorage):
    def __init__(
        self,
        bucket: StorageBucket,
        clock_ms: Callable[[], int] = _epoch_ms,
    ):
        self._bucket = bucket
        self._clock_ms = clock_ms

    async def store(self, attachment: Attachment) -> str:
        key = attachment_key(attachment.filename, self._clock_ms())
        await self._bucket.upload(key, attachment.content, attachment.content_type)
        return self._bucket.get_public_url(key)
