from abc import ABC, abstractmethod

from ....domain.entities import Profile


class ProfileRepository(ABC):
    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Profile | None:
        pass
