from abc import ABC, abstractmethod

from ....domain.entities import Certification, CertificationDraft


class CertificationRepository(ABC):
    @abstractmethod
    async def list_all(self) -> list[Certification]:
        """All records, newest created first."""

    @abstractmethod
    async def get_by_id(self, certification_id: str) -> Certification | None:
        pass

    @abstractmethod
    async def create(self, draft: CertificationDraft) -> Certification:
        pass

    @abstractmethod
    async def update(
        self,
        certification_id: str,
        draft: CertificationDraft,
        replace_file: bool = False,
    ) -> Certification | None:
        """Replace the editable fields of a record.

        The stored file URL is only overwritten when ``replace_file`` is set.
        """

    @abstractmethod
    async def delete(self, certification_id: str) -> None:
        pass
