"""Admin panel operations on certifications and their skills.

Every mutation reports its outcome as a notification and, when it worked,
refetches the affected list from the backend instead of patching local
state. Backend error details are logged, never shown to the user.
"""

import structlog

from ..dtos.certification_dto import (
    AdminResultDTO,
    CertificationFormDTO,
    CertificationResponseDTO,
    NotificationDTO,
    SkillListDTO,
)
from ..ports.inbound import ManageCertificationsUseCase, ManageSkillsUseCase
from ..ports.outbound import (
    Attachment,
    BackendError,
    CertificationRepository,
    FileStorage,
    SkillRepository,
)

logger = structlog.get_logger()


class AdminService(ManageCertificationsUseCase, ManageSkillsUseCase):
    """Application service behind the admin panel."""

    def __init__(
        self,
        certifications: CertificationRepository,
        skills: SkillRepository,
        storage: FileStorage,
    ):
        self._certifications = certifications
        self._skills = skills
        self._storage = storage

    # -- certifications -------------------------------------------------

    async def load(self) -> AdminResultDTO:
        result = AdminResultDTO()
        await self._refetch_certifications(result)
        return result

    async def create(
        self, form: CertificationFormDTO, attachment: Attachment | None = None
    ) -> AdminResultDTO:
        draft = form.to_draft()

        if attachment is not None:
            url = await self._upload(attachment)
            if url is None:
                return AdminResultDTO(notifications=[NotificationDTO.error("Failed to upload file")])
            draft.certificate_file_url = url

        try:
            await self._certifications.create(draft)
        except BackendError as e:
            self._log_failure("create certification", e)
            return AdminResultDTO(
                notifications=[NotificationDTO.error("Failed to create certification")]
            )

        result = AdminResultDTO(
            notifications=[NotificationDTO.success("Certification created successfully")]
        )
        await self._refetch_certifications(result)
        return result

    async def update(
        self,
        certification_id: str,
        form: CertificationFormDTO,
        attachment: Attachment | None = None,
    ) -> AdminResultDTO:
        draft = form.to_draft()

        # The previous object stays in storage when a new file replaces it
        if attachment is not None:
            url = await self._upload(attachment)
            if url is None:
                return AdminResultDTO(notifications=[NotificationDTO.error("Failed to upload file")])
            draft.certificate_file_url = url

        try:
            updated = await self._certifications.update(
                certification_id, draft, replace_file=attachment is not None
            )
        except BackendError as e:
            self._log_failure("update certification", e, certification_id=certification_id)
            return AdminResultDTO(
                notifications=[NotificationDTO.error("Failed to update certification")]
            )

        if updated is None:
            logger.warning("Update matched no certification", certification_id=certification_id)
            return AdminResultDTO(
                notifications=[NotificationDTO.error("Failed to update certification")]
            )

        result = AdminResultDTO(
            notifications=[NotificationDTO.success("Certification updated successfully")]
        )
        await self._refetch_certifications(result)
        return result

    async def delete(self, certification_id: str) -> AdminResultDTO:
        try:
            await self._certifications.delete(certification_id)
        except BackendError as e:
            self._log_failure("delete certification", e, certification_id=certification_id)
            return AdminResultDTO(
                notifications=[NotificationDTO.error("Failed to delete certification")]
            )

        result = AdminResultDTO(
            notifications=[NotificationDTO.success("Certification deleted successfully")]
        )
        await self._refetch_certifications(result)
        return result

    # -- skills ----------------------------------------------------------

    async def list_skills(self, certification_id: str) -> AdminResultDTO:
        result = AdminResultDTO()
        await self._refetch_skills(certification_id, result)
        return result

    async def add_skill(self, certification_id: str, skill_name: str) -> AdminResultDTO:
        name = skill_name.strip()
        if not name:
            return AdminResultDTO()

        # No uniqueness check: the same name can be added twice
        try:
            await self._skills.add(certification_id, name)
        except BackendError as e:
            self._log_failure("add skill", e, certification_id=certification_id)
            return AdminResultDTO(notifications=[NotificationDTO.error("Failed to add skill")])

        result = AdminResultDTO(notifications=[NotificationDTO.success("Skill added successfully")])
        await self._refetch_skills(certification_id, result)
        return result

    async def remove_skill(self, certification_id: str, skill_name: str) -> AdminResultDTO:
        try:
            await self._skills.remove(certification_id, skill_name)
        except BackendError as e:
            self._log_failure("remove skill", e, certification_id=certification_id)
            return AdminResultDTO(notifications=[NotificationDTO.error("Failed to remove skill")])

        result = AdminResultDTO(
            notifications=[NotificationDTO.success("Skill removed successfully")]
        )
        await self._refetch_skills(certification_id, result)
        return result

    # -- helpers ---------------------------------------------------------

    async def _upload(self, attachment: Attachment) -> str | None:
        try:
            return await self._storage.store(attachment)
        except BackendError as e:
            self._log_failure("upload file", e, filename=attachment.filename)
            return None

    async def _refetch_certifications(self, result: AdminResultDTO) -> None:
        try:
            records = await self._certifications.list_all()
        except BackendError as e:
            self._log_failure("fetch certifications", e)
            result.notifications.append(NotificationDTO.error("Failed to fetch certifications"))
            return
        result.certifications = [CertificationResponseDTO.from_entity(r) for r in records]

    async def _refetch_skills(self, certification_id: str, result: AdminResultDTO) -> None:
        try:
            skills = await self._skills.list_for(certification_id)
        except BackendError as e:
            self._log_failure("fetch skills", e, certification_id=certification_id)
            result.notifications.append(NotificationDTO.error("Failed to fetch skills"))
            return
        result.skills = SkillListDTO(
            certification_id=certification_id,
            skills=[s.skill_name for s in skills],
        )

    def _log_failure(self, action: str, error: BackendError, **context) -> None:
        logger.error(
            "Admin action failed",
            action=action,
            error=str(error),
            error_type=type(error).__name__,
            status_code=error.status_code,
            **context,
        )
