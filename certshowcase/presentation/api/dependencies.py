from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request, Response, status

from ...application.ports.outbound import BackendError
from ...application.services import (
    AdminService,
    AuthGate,
    ListingService,
    ListingViewRegistry,
    SessionStore,
)
from ...config import settings
from ...domain.entities import AuthSession
from ...domain.services import TransitionAnimator
from ...domain.value_objects import AuthEvent, GateState
from ...infrastructure.adapters import (
    BackendAuthProvider,
    BucketFileStorage,
    RestCertificationRepository,
    RestProfileRepository,
    RestSkillRepository,
)
from ...infrastructure.backend import AuthApi, BackendClient, StorageBucket
from ..middleware.auth import (
    JWTVerifier,
    cookie_persistence,
    get_refresh_token_from_cookie,
    get_token_from_request,
    restore_session,
)

logger = structlog.get_logger()

# Process-wide singletons
_backend_client: BackendClient | None = None
_jwt_verifier: JWTVerifier | None = None
_listing_views: ListingViewRegistry | None = None


def get_backend_client() -> BackendClient:
    global _backend_client
    if _backend_client is None:
        _backend_client = BackendClient(
            base_url=settings.backend_url,
            anon_key=settings.backend_anon_key,
            timeout=settings.backend_timeout,
        )
    return _backend_client


async def close_backend_client() -> None:
    global _backend_client
    if _backend_client is not None:
        await _backend_client.aclose()
        _backend_client = None


def get_jwt_verifier() -> JWTVerifier:
    global _jwt_verifier
    if _jwt_verifier is None:
        api = AuthApi(get_backend_client())
        _jwt_verifier = JWTVerifier(
            fetch_jwks=api.fetch_jwks,
            audience=settings.jwt_audience,
            issuer=settings.auth_base_url,
            allowed_algorithms=settings.jwt_algorithms,
            cache_ttl=settings.jwks_cache_ttl,
        )
    return _jwt_verifier


def get_listing_views() -> ListingViewRegistry:
    global _listing_views
    if _listing_views is None:
        _listing_views = ListingViewRegistry(
            animator_factory=lambda: TransitionAnimator(window=settings.transition_window_seconds),
            max_views=settings.max_listing_views,
        )
    return _listing_views


# =============================================================================
# Public listing
# =============================================================================


def get_certification_repository(
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> RestCertificationRepository:
    return RestCertificationRepository(client, settings.certifications_table)


def get_listing_service(
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> ListingService:
    return ListingService(
        certifications=RestCertificationRepository(client, settings.certifications_table),
        skills=RestSkillRepository(client, settings.skills_table),
    )


# =============================================================================
# Session and auth gate
# =============================================================================


async def get_session_store(
    request: Request,
    response: Response,
    verifier: Annotated[JWTVerifier, Depends(get_jwt_verifier)],
) -> SessionStore:
    """Per-request session store seeded from the request's credentials.

    Session changes made while handling the request are written back to the
    response cookies.
    """
    store = SessionStore()
    store.subscribe(cookie_persistence(response, secure=not settings.debug))
    session = await restore_session(
        verifier,
        get_token_from_request(request),
        get_refresh_token_from_cookie(request),
    )
    store.publish(AuthEvent.INITIAL_SESSION, session)
    return store


def get_auth_gate(
    store: Annotated[SessionStore, Depends(get_session_store)],
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> AuthGate:
    provider = BackendAuthProvider(AuthApi(client), store)
    return AuthGate(provider, store, admin_route=settings.admin_route)


async def require_session(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> AuthSession:
    """Route guard: the request must carry a valid session."""
    if gate.state is not GateState.AUTHENTICATED or gate.session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return gate.session


async def require_admin(
    session: Annotated[AuthSession, Depends(require_session)],
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> AuthSession:
    """Route guard for the admin surface.

    With ``require_admin_profile`` enabled the user's profile must also carry
    the admin flag.
    """
    if not settings.require_admin_profile:
        return session

    profiles = RestProfileRepository(
        client, settings.profiles_table, access_token=session.access_token
    )
    try:
        profile = await profiles.get_by_user_id(session.user.id)
    except BackendError as e:
        logger.error("Profile lookup failed", user_id=session.user.id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to verify admin access",
        ) from e

    if profile is None or not profile.is_admin:
        logger.warning("Access denied: not an admin", user_id=session.user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return session


def get_admin_service(
    session: Annotated[AuthSession, Depends(require_admin)],
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> AdminService:
    token = session.access_token
    return AdminService(
        certifications=RestCertificationRepository(
            client, settings.certifications_table, access_token=token
        ),
        skills=RestSkillRepository(client, settings.skills_table, access_token=token),
        storage=BucketFileStorage(
            StorageBucket(client, settings.storage_bucket, access_token=token)
        ),
    )
