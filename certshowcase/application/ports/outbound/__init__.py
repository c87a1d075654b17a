from .auth_provider import AuthProvider
from .certification_repository import CertificationRepository
from .errors import AuthProviderError, BackendError, BackendResponseError, StorageError
from .file_storage import Attachment, FileStorage
from .profile_repository import ProfileRepository
from .skill_repository import SkillRepository

__all__ = [
    "Attachment",
    "AuthProvider",
    "AuthProviderError",
    "BackendError",
    "BackendResponseError",
    "CertificationRepository",
    "FileStorage",
    "ProfileRepository",
    "SkillRepository",
    "StorageError",
]
