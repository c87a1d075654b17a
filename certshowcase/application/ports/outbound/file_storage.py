from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Attachment:
    """A file submitted with the admin form."""

    filename: str
    content: bytes = field(repr=False)
    content_type: str | None = None


class FileStorage(ABC):
    @abstractmethod
    async def store(self, attachment: Attachment) -> str:
        """Upload the attachment and return its public URL."""
