from abc import ABC, abstractmethod

from ....domain.entities import AuthSession


class AuthProvider(ABC):
    """Outbound port to the hosted auth service.

    Implementations announce session changes through the session store they
    were built with; callers do not update session state themselves.
    """

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass

    @abstractmethod
    async def refresh_session(self, refresh_token: str) -> AuthSession:
        pass
