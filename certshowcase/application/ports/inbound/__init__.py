from .certification_use_cases import (
    BrowseCertificationsUseCase,
    ManageCertificationsUseCase,
    ManageSkillsUseCase,
)

__all__ = [
    "BrowseCertificationsUseCase",
    "ManageCertificationsUseCase",
    "ManageSkillsUseCase",
]
