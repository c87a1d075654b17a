from abc import ABC, abstractmethod

from ...dtos.certification_dto import (
    AdminResultDTO,
    CertificationFormDTO,
    ListingCriteriaDTO,
    ListingResponseDTO,
    SkillListDTO,
)
from ..outbound.file_storage import Attachment


class BrowseCertificationsUseCase(ABC):
    """Inbound port for the public listing."""

    @abstractmethod
    async def browse(self, criteria: ListingCriteriaDTO) -> ListingResponseDTO:
        pass

    @abstractmethod
    async def skills_for(self, certification_id: str) -> SkillListDTO:
        pass


class ManageCertificationsUseCase(ABC):
    """Inbound port for the admin panel."""

    @abstractmethod
    async def load(self) -> AdminResultDTO:
        pass

    @abstractmethod
    async def create(
        self, form: CertificationFormDTO, attachment: Attachment | None = None
    ) -> AdminResultDTO:
        pass

    @abstractmethod
    async def update(
        self,
        certification_id: str,
        form: CertificationFormDTO,
        attachment: Attachment | None = None,
    ) -> AdminResultDTO:
        pass

    @abstractmethod
    async def delete(self, certification_id: str) -> AdminResultDTO:
        pass


class ManageSkillsUseCase(ABC):
    """Inbound port for the per-certification skills dialog."""

    @abstractmethod
    async def list_skills(self, certification_id: str) -> AdminResultDTO:
        pass

    @abstractmethod
    async def add_skill(self, certification_id: str, skill_name: str) -> AdminResultDTO:
        pass

    @abstractmethod
    async def remove_skill(self, certification_id: str, skill_name: str) -> AdminResultDTO:
        pass
