"""Admin authentication: password login, password change, admin creation."""

import logging

from sqlmodel import select

from guestlist.context import ServiceContext
from guestlist.errors import Conflict, InvalidCredentials, Unauthenticated, ValidationError
from guestlist.models.admin import Admin
from guestlist.services import invite_service, session_service
from guestlist.services.session_service import AdminPendingSession, AdminSession
from guestlist.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_admin_by_username(ctx: ServiceContext, username: str) -> Admin | None:
    return ctx.db.exec(select(Admin).where(Admin.username == username)).first()


def admin_login(ctx: ServiceContext, token: str | None, username: str, password: str) -> Admin:
    """Complete the admin login started by an admin invite code.

    The caller must hold an admin_pending session. Unknown usernames and
    wrong passwords fail identically, and the session stays admin_pending.
    """
    current = session_service.get_session(ctx, token)
    if not isinstance(current, AdminPendingSession):
        raise Unauthenticated("admin login requires an admin_pending session")

    admin = get_admin_by_username(ctx, username)
    valid = verify_password(password, admin.password_hash if admin else None)
    if admin is None or not valid:
        logger.warning("Failed admin login for username %r", username)
        raise InvalidCredentials()

    session_service.upgrade_to_admin(ctx, token, admin.id)
    logger.info("Admin %s logged in", admin.username)
    return admin


def change_password(
    ctx: ServiceContext,
    session: AdminSession,
    current_password: str,
    new_password: str,
) -> None:
    """Rotate the logged-in admin's password.

    The new password's length is checked before the current password.
    Other sessions held by the same admin stay valid.
    """
    if len(new_password) < ctx.settings.min_password_length:
        raise ValidationError(
            f"New password must be at least {ctx.settings.min_password_length} characters",
            field="new_password",
        )

    admin = ctx.db.get(Admin, session.admin_id)
    if not admin:
        raise Unauthenticated("admin no longer exists")

    if not verify_password(current_password, admin.password_hash):
        raise ValidationError("Current password is incorrect", field="current_password")

    admin.password_hash = hash_password(new_password)
    ctx.db.add(admin)
    ctx.db.commit()
    logger.info("Admin %s changed password", admin.username)


def create_admin(
    ctx: ServiceContext,
    username: str,
    password: str,
    code: str | None = None,
) -> Admin:
    """Create an admin account, optionally with its admin invite code.

    Account and code are committed together. Used by the CLI, not exposed
    over HTTP.
    """
    username = username.strip()
    if not username:
        raise ValidationError("Username is required", field="username")
    if len(password) < ctx.settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {ctx.settings.min_password_length} characters",
            field="password",
        )
    if get_admin_by_username(ctx, username):
        raise Conflict(f"Admin {username!r} already exists", field="username")
    if code is not None:
        code = invite_service.normalize_code(code)
        if invite_service.code_exists(ctx, code):
            raise Conflict("Invite code already in use", field="code")

    admin = Admin(username=username, password_hash=hash_password(password))
    ctx.db.add(admin)
    if code is not None:
        invite_service.issue_admin_code(ctx, code)
    ctx.db.commit()
    ctx.db.refresh(admin)
    logger.info("Created admin %s", admin.username)
    return admin
