from .inbound import (
    BrowseCertificationsUseCase,
    ManageCertificationsUseCase,
    ManageSkillsUseCase,
)
from .outbound import (
    Attachment,
    AuthProvider,
    CertificationRepository,
    FileStorage,
    ProfileRepository,
    SkillRepository,
)

__all__ = [
    "Attachment",
    "AuthProvider",
    "BrowseCertificationsUseCase",
    "CertificationRepository",
    "FileStorage",
    "ManageCertificationsUseCase",
    "ManageSkillsUseCase",
    "ProfileRepository",
    "SkillRepository",
]
