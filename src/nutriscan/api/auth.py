"""Authentication endpoints and the bearer-token dependency."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, HTTPException, Request, status

from nutriscan.api.models import AuthRequest, AuthResponse, LoginRequest, UserOut
from nutriscan.domain.models import AuthSession, AuthUser

if TYPE_CHECKING:
    from nutriscan.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthUser:
    """Resolve the bearer token to a user or reject the request."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container: AppContainer = request.app.state.container
    try:
        user = container.user_service.authenticate(token)
    except Exception:
        logger.warning("Token verification failed", exc_info=True)
        user = None
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user


@router.post("/auth")
def authenticate(payload: AuthRequest, request: Request) -> AuthResponse:
    """Sign in or register depending on the form mode."""
    container: AppContainer = request.app.state.container
    form = payload.root
    try:
        if isinstance(form, LoginRequest):
            session = container.user_service.login(form.email, form.password)
        else:
            session = container.user_service.register(form.email, form.password)
    except Exception as exc:
        logger.warning("Authentication failed", extra={"mode": form.mode})
        detail = "Invalid email or password."
        if container.settings.environment == "local":
            detail = f"{detail} (debug: {type(exc).__name__}: {exc})"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=detail
        ) from exc
    return _to_response(session)


def _to_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        access_token=session.access_token,
        requires_confirmation=session.access_token is None,
        user=UserOut(id=str(session.user.id), email=session.user.email),
    )
