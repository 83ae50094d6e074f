"""Common API dependencies: service context, session extraction, type checks."""

from typing import Optional

from fastapi import Depends, Request, Response
from sqlmodel import Session

from guestlist.config import Settings, settings
from guestlist.context import ServiceContext
from guestlist.database import get_session
from guestlist.errors import Unauthenticated
from guestlist.services import session_service
from guestlist.services.session_service import (
    AdminPendingSession,
    AdminSession,
    CurrentSession,
    GuestSession,
)


def get_settings() -> Settings:
    return settings


def get_context(
    session: Session = Depends(get_session),
    app_settings: Settings = Depends(get_settings),
) -> ServiceContext:
    """Per-request service context bound to one database session."""
    return ServiceContext(db=session, settings=app_settings)


def get_session_token(
    request: Request,
    app_settings: Settings = Depends(get_settings),
) -> Optional[str]:
    return request.cookies.get(app_settings.session_cookie_name)


def set_session_cookie(response: Response, token: str, app_settings: Settings) -> None:
    response.set_cookie(
        key=app_settings.session_cookie_name,
        value=token,
        max_age=int(app_settings.session_ttl.total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=app_settings.cookie_secure,
    )


def clear_session_cookie(response: Response, app_settings: Settings) -> None:
    response.delete_cookie(key=app_settings.session_cookie_name, path="/")


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    ctx: ServiceContext = Depends(get_context),
) -> CurrentSession:
    """Any live session, including admin_pending."""
    return session_service.get_session(ctx, token)


def require_guest(session: CurrentSession = Depends(get_current_session)) -> GuestSession:
    if not isinstance(session, GuestSession):
        raise Unauthenticated("guest session required")
    return session


def require_admin(session: CurrentSession = Depends(get_current_session)) -> AdminSession:
    if not isinstance(session, AdminSession):
        raise Unauthenticated("admin session required")
    return session


def require_authenticated(
    session: CurrentSession = Depends(get_current_session),
) -> CurrentSession:
    """Guest or fully logged-in admin; admin_pending is turned away."""
    if isinstance(session, AdminPendingSession):
        raise Unauthenticated("admin login not completed")
    return session
