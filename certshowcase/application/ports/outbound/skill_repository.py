from abc import ABC, abstractmethod

from ....domain.entities import Skill


class SkillRepository(ABC):
    @abstractmethod
    async def list_for(self, certification_id: str) -> list[Skill]:
        """Skills of one certification, alphabetical by name."""

    @abstractmethod
    async def add(self, certification_id: str, skill_name: str) -> Skill:
        pass

    @abstractmethod
    async def remove(self, certification_id: str, skill_name: str) -> int:
        """Delete every row with this name on this certification; return the count."""
