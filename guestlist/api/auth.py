"""Authentication & session API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from guestlist.api.deps import (
    clear_session_cookie,
    get_context,
    get_current_session,
    get_session_token,
    get_settings,
    set_session_cookie,
)
from guestlist.config import Settings
from guestlist.context import ServiceContext
from guestlist.schemas.auth import (
    AdminLoginRequest,
    AdminLoginResponse,
    SessionResponse,
    ValidateCodeRequest,
    ValidateCodeResponse,
)
from guestlist.services import admin_service, session_service
from guestlist.services.session_service import CurrentSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/code", response_model=ValidateCodeResponse)
def validate_code(
    request: ValidateCodeRequest,
    response: Response,
    ctx: ServiceContext = Depends(get_context),
    app_settings: Settings = Depends(get_settings),
):
    """Exchange an invite code for a guest or admin_pending session."""
    session, guest_name = session_service.exchange_code(ctx, request.code)
    set_session_cookie(response, session.token, app_settings)
    return ValidateCodeResponse(session_type=session.session_type, guest_name=guest_name)


@router.post("/admin/login", response_model=AdminLoginResponse)
def admin_login(
    request: AdminLoginRequest,
    token: Optional[str] = Depends(get_session_token),
    ctx: ServiceContext = Depends(get_context),
):
    """Finish admin login. Upgrades the current admin_pending session in place."""
    admin = admin_service.admin_login(ctx, token, request.username, request.password)
    return AdminLoginResponse(username=admin.username)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    ctx: ServiceContext = Depends(get_context),
    app_settings: Settings = Depends(get_settings),
):
    """Revoke the current session (if any) and clear the cookie."""
    session_service.revoke(ctx, token)
    clear_session_cookie(response, app_settings)


@router.get("/session", response_model=SessionResponse)
def get_session_info(
    session: CurrentSession = Depends(get_current_session),
    ctx: ServiceContext = Depends(get_context),
):
    """Describe the current session. Works for admin_pending too."""
    return SessionResponse(**session_service.describe(ctx, session))
