from .certification import (
    Certification,
    CertificationDraft,
    CertificationStatus,
    CertificationType,
)
from .profile import Profile
from .session import AuthSession, AuthUser
from .skill import Skill

__all__ = [
    "AuthSession",
    "AuthUser",
    "Certification",
    "CertificationDraft",
    "CertificationStatus",
    "CertificationType",
    "Profile",
    "Skill",
]
