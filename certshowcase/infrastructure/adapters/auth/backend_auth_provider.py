from typing import Any

import structlog

from ....application.ports.outbound import AuthProvider, AuthProviderError, BackendResponseError
from ....application.services.auth_gate import SessionStore
from ....domain.entities import AuthSession, AuthUser
from ....domain.value_objects import AuthEvent
from ...backend import AuthApi

logger = structlog.get_logger()


def session_from_payload(payload: dict[str, Any]) -> AuthSession:
    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise BackendResponseError("Auth response has no user id")
    return AuthSession(
        user=AuthUser(id=str(user["id"]), email=user.get("email")),
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        expires_in=payload.get("expires_in"),
    )


class BackendAuthProvider(AuthProvider):
    """Auth provider backed by the hosted auth service.

    Successful calls are announced on ``store``; that notification is the only
    way session state changes.
    """

    def __init__(self, api: AuthApi, store: SessionStore):
        self._api = api
        self._store = store

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        session = session_from_payload(await self._api.sign_in_with_password(email, password))
        logger.info("User signed in", user_id=session.user.id)
        self._store.publish(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        session = self._store.session
        if session is not None:
            # The local session ends even if the revoke call fails
            try:
                await self._api.sign_out(session.access_token)
            finally:
                self._store.publish(AuthEvent.SIGNED_OUT, None)
            logger.info("User signed out", user_id=session.user.id)
            return
        self._store.publish(AuthEvent.SIGNED_OUT, None)

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        try:
            payload = await self._api.refresh(refresh_token)
        except AuthProviderError as e:
            # A rejected refresh token ends the session; an outage does not
            if e.status_code is not None:
                self._store.publish(AuthEvent.SIGNED_OUT, None)
            raise
        session = session_from_payload(payload)
        self._store.publish(AuthEvent.TOKEN_REFRESHED, session)
        return session
