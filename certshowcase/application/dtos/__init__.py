from .auth_dto import SessionStateDTO, SignInDTO, SignInResponseDTO
from .certification_dto import (
    AddSkillDTO,
    AdminResultDTO,
    CertificationFormDTO,
    CertificationResponseDTO,
    ListingCriteriaDTO,
    ListingResponseDTO,
    ListingViewResponseDTO,
    NotificationDTO,
    SkillListDTO,
)

__all__ = [
    "AddSkillDTO",
    "AdminResultDTO",
    "CertificationFormDTO",
    "CertificationResponseDTO",
    "ListingCriteriaDTO",
    "ListingResponseDTO",
    "ListingViewResponseDTO",
    "NotificationDTO",
    "SessionStateDTO",
    "SignInDTO",
    "SignInResponseDTO",
    "SkillListDTO",
]
