"""Session state and the sign-in gate in front of the admin surface.

``SessionStore`` is the single owner of the current session. Anything that
depends on it (the gate, cookie persistence, route guards) subscribes and is
told about every change; nothing else mutates the session.
"""

from collections.abc import Callable

import structlog

from ...domain.entities import AuthSession
from ...domain.value_objects import AuthEvent, GateState
from ..ports.outbound import AuthProvider, AuthProviderError, BackendError

logger = structlog.get_logger()

SessionListener = Callable[[AuthEvent, AuthSession | None], None]


class SessionStore:
    """Holds the current session and notifies subscribers on every change."""

    def __init__(self) -> None:
        self._session: AuthSession | None = None
        self._initialized = False
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def initialized(self) -> bool:
        """True once the initial session (possibly none) has been published."""
        return self._initialized

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: AuthEvent, session: AuthSession | None) -> None:
        self._session = None if event is AuthEvent.SIGNED_OUT else session
        self._initialized = True
        logger.debug(
            "Session changed",
            event=event.value,
            user_id=self._session.user.id if self._session else None,
        )
        for listener in list(self._listeners):
            listener(event, self._session)


class SignInError(Exception):
    """Sign-in was rejected; ``message`` is the provider's wording, unchanged."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthGate:
    """Tracks whether the visitor is signed in and drives the admin redirect.

    Starts in ``LOADING`` until the store has published the initial session,
    then follows the store: a session means ``AUTHENTICATED``, none means
    ``ANONYMOUS``.
    """

    def __init__(
        self,
        provider: AuthProvider,
        store: SessionStore,
        admin_route: str = "/admin",
    ) -> None:
        self._provider = provider
        self._store = store
        self._admin_route = admin_route
        self._state = GateState.LOADING
        if store.initialized:
            self._state = GateState.AUTHENTICATED if store.session else GateState.ANONYMOUS
        self._unsubscribe = store.subscribe(self._on_session_change)

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def session(self) -> AuthSession | None:
        return self._store.session

    @property
    def redirect_to(self) -> str | None:
        """Where a visitor on the sign-in surface should be sent, if anywhere."""
        if self._state is GateState.AUTHENTICATED:
            return self._admin_route
        return None

    def _on_session_change(self, event: AuthEvent, session: AuthSession | None) -> None:
        self._state = GateState.AUTHENTICATED if session else GateState.ANONYMOUS

    async def sign_in(self, email: str, password: str) -> str:
        """Sign in and return the route to redirect to.

        Raises:
            SignInError: the provider rejected the credentials or was unreachable
        """
        self._state = GateState.LOADING
        try:
            await self._provider.sign_in_with_password(email, password)
        except AuthProviderError as e:
            self._state = GateState.ANONYMOUS
            logger.info("Sign-in rejected", status_code=e.status_code)
            raise SignInError(e.message) from e
        except BackendError as e:
            self._state = GateState.ANONYMOUS
            logger.error("Sign-in failed", error=str(e), error_type=type(e).__name__)
            raise SignInError(e.message) from e

        # The provider's SIGNED_IN notification has moved the gate by now
        return self._admin_route

    async def sign_out(self) -> None:
        await self._provider.sign_out()

    async def refresh(self, refresh_token: str) -> AuthSession:
        """Exchange the refresh token for a new session.

        Raises:
            BackendError: the token was rejected or the provider was unreachable
        """
        return await self._provider.refresh_session(refresh_token)

    def close(self) -> None:
        self._unsubscribe()
