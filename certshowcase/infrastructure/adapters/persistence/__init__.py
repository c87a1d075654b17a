from .rest_certification_repository import RestCertificationRepository
from .rest_profile_repository import RestProfileRepository
from .rest_skill_repository import RestSkillRepository

__all__ = ["RestCertificationRepository", "RestProfileRepository", "RestSkillRepository"]
