"""Sign-in gate endpoints.

Security: tokens returned by the auth service are written to httpOnly
cookies by the session store's cookie subscriber and are never included in
response bodies.

Flow:
1. Page asks GET /auth/session; an authenticated visitor is sent to the admin route
2. Visitor submits credentials to POST /auth/sign-in
3. On success the session cookies are set and the response names the admin route
4. POST /auth/sign-out revokes the session and clears the cookies
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status

from ....application.dtos import SessionStateDTO, SignInDTO, SignInResponseDTO
from ....application.ports.outbound import BackendError
from ....application.services import AuthGate, SignInError
from ...middleware import get_refresh_token_from_cookie
from ..dependencies import get_auth_gate

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["Authentication"])

Gate = Annotated[AuthGate, Depends(get_auth_gate)]


@router.get(
    "/session",
    response_model=SessionStateDTO,
    summary="Check session status",
)
async def check_session(gate: Gate) -> SessionStateDTO:
    """Current gate state, plus where to redirect an already signed-in visitor."""
    session = gate.session
    return SessionStateDTO(
        state=gate.state,
        user_id=session.user.id if session else None,
        email=session.user.email if session else None,
        redirect_to=gate.redirect_to,
    )


@router.post(
    "/sign-in",
    response_model=SignInResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
)
async def sign_in(credentials: SignInDTO, gate: Gate) -> SignInResponseDTO:
    """Authenticate against the auth service.

    The provider's error message is returned unchanged in ``detail`` so the
    page can show it to the visitor.
    """
    try:
        redirect_to = await gate.sign_in(credentials.email, credentials.password)
    except SignInError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e

    return SignInResponseDTO(
        success=True,
        message="Logged in successfully!",
        redirect_to=redirect_to,
    )


@router.post(
    "/sign-out",
    response_model=SignInResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Sign out and clear session",
)
async def sign_out(gate: Gate) -> SignInResponseDTO:
    """End the session; cookies are cleared even if the revoke call fails."""
    try:
        await gate.sign_out()
    except BackendError as e:
        logger.warning("Session revoke failed", error=str(e), status_code=e.status_code)

    return SignInResponseDTO(success=True, message="Signed out successfully")


@router.post(
    "/refresh",
    response_model=SignInResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
)
async def refresh_token(request: Request, gate: Gate) -> SignInResponseDTO:
    """Exchange the refresh token cookie for a new session.

    Security: the refresh token is only ever read from its httpOnly cookie.
    """
    token = get_refresh_token_from_cookie(request)
    if not token:
        return SignInResponseDTO(success=False, message="No refresh token available")

    try:
        await gate.refresh(token)
    except BackendError as e:
        logger.info("Token refresh failed", status_code=e.status_code)
        return SignInResponseDTO(success=False, message="Session expired")

    return SignInResponseDTO(success=True, message="Session refreshed")
