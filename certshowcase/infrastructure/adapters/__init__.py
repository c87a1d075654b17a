from .auth import BackendAuthProvider
from .persistence import RestCertificationRepository, RestProfileRepository, RestSkillRepository
from .storage import BucketFileStorage

__all__ = [
    "BackendAuthProvider",
    "BucketFileStorage",
    "RestCertificationRepository",
    "RestProfileRepository",
    "RestSkillRepository",
]
