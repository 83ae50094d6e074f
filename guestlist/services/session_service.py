"""Session manager: issue, look up, upgrade and revoke session tokens.

Sessions are server-side rows keyed by an opaque token. Callers never see
the row itself; they get one of three variants, each carrying only the ids
valid for its type:

    GuestSession         guest_id
    AdminPendingSession  (nothing; admin code accepted, password not yet)
    AdminSession         admin_id

Expiry is checked lazily on lookup. Expired rows stay in storage until
revoked or purged with ``purge_expired``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from sqlmodel import select

from guestlist.context import ServiceContext, as_utc
from guestlist.errors import Unauthenticated
from guestlist.models.admin import Admin
from guestlist.models.guest import Guest
from guestlist.models.session import (
    SESSION_ADMIN,
    SESSION_ADMIN_PENDING,
    SESSION_GUEST,
    AuthSession,
)
from guestlist.services import invite_service
from guestlist.utils.security import generate_session_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuestSession:
    id: str
    token: str
    expires_at: datetime
    guest_id: str
    session_type: str = SESSION_GUEST


@dataclass(frozen=True)
class AdminPendingSession:
    id: str
    token: str
    expires_at: datetime
    session_type: str = SESSION_ADMIN_PENDING


@dataclass(frozen=True)
class AdminSession:
    id: str
    token: str
    expires_at: datetime
    admin_id: str
    session_type: str = SESSION_ADMIN


CurrentSession = Union[GuestSession, AdminPendingSession, AdminSession]


def to_variant(row: AuthSession) -> CurrentSession:
    """Convert a storage row into its tagged variant."""
    expires_at = as_utc(row.expires_at)
    if row.session_type == SESSION_GUEST and row.guest_id and not row.admin_id:
        return GuestSession(id=row.id, token=row.token, expires_at=expires_at, guest_id=row.guest_id)
    if row.session_type == SESSION_ADMIN_PENDING and not row.guest_id and not row.admin_id:
        return AdminPendingSession(id=row.id, token=row.token, expires_at=expires_at)
    if row.session_type == SESSION_ADMIN and row.admin_id and not row.guest_id:
        return AdminSession(id=row.id, token=row.token, expires_at=expires_at, admin_id=row.admin_id)
    raise RuntimeError(f"Session {row.id} has an invalid shape for type {row.session_type!r}")


def _create(
    ctx: ServiceContext,
    session_type: str,
    guest_id: Optional[str] = None,
    admin_id: Optional[str] = None,
) -> AuthSession:
    now = ctx.now()
    row = AuthSession(
        token=generate_session_token(),
        session_type=session_type,
        guest_id=guest_id,
        admin_id=admin_id,
        expires_at=now + ctx.settings.session_ttl,
        created_at=now,
    )
    ctx.db.add(row)
    ctx.db.commit()
    ctx.db.refresh(row)
    logger.info("Created %s session %s", session_type, row.id)
    return row


def exchange_code(ctx: ServiceContext, code: str) -> tuple[CurrentSession, Optional[str]]:
    """Trade an invite code for a new session.

    Returns the session and, for guest codes, the guest's display name.
    Unknown codes raise NotFound.
    """
    match = invite_service.validate_code(ctx, code)

    if isinstance(match, invite_service.GuestMatch):
        guest = ctx.db.get(Guest, match.guest_id)
        if not guest:
            raise RuntimeError(f"Invite code references missing guest {match.guest_id}")
        row = _create(ctx, SESSION_GUEST, guest_id=guest.id)
        return to_variant(row), guest.name

    row = _create(ctx, SESSION_ADMIN_PENDING)
    return to_variant(row), None


def _load_row(ctx: ServiceContext, token: Optional[str]) -> AuthSession:
    if not token:
        raise Unauthenticated("missing token")

    row = ctx.db.exec(select(AuthSession).where(AuthSession.token == token)).first()
    if not row:
        raise Unauthenticated("unknown or revoked token")

    if as_utc(row.expires_at) <= ctx.now():
        raise Unauthenticated("expired session")
    return row


def get_session(ctx: ServiceContext, token: Optional[str]) -> CurrentSession:
    """Resolve a token to its live session or raise Unauthenticated."""
    return to_variant(_load_row(ctx, token))


def upgrade_to_admin(ctx: ServiceContext, token: Optional[str], admin_id: str) -> AdminSession:
    """admin_pending -> admin on the same row and token.

    The expiry restarts from the moment the password was accepted.
    """
    row = _load_row(ctx, token)
    if row.session_type != SESSION_ADMIN_PENDING:
        raise Unauthenticated("session is not admin_pending")

    row.session_type = SESSION_ADMIN
    row.admin_id = admin_id
    row.expires_at = ctx.now() + ctx.settings.session_ttl
    ctx.db.add(row)
    ctx.db.commit()
    ctx.db.refresh(row)

    logger.info("Upgraded session %s to admin %s", row.id, admin_id)
    return to_variant(row)


def revoke(ctx: ServiceContext, token: Optional[str]) -> None:
    """Delete the session for a token. Unknown tokens are ignored."""
    if not token:
        return
    row = ctx.db.exec(select(AuthSession).where(AuthSession.token == token)).first()
    if row:
        session_id = row.id
        ctx.db.delete(row)
        ctx.db.commit()
        logger.info("Revoked session %s", session_id)


def purge_expired(ctx: ServiceContext) -> int:
    """Delete every elapsed session. Returns the number removed."""
    expired = ctx.db.exec(select(AuthSession).where(AuthSession.expires_at <= ctx.now())).all()
    for row in expired:
        ctx.db.delete(row)
    ctx.db.commit()
    logger.info("Purged %d expired sessions", len(expired))
    return len(expired)


def describe(ctx: ServiceContext, session: CurrentSession) -> dict:
    """Introspection payload. Never includes the token or any hash."""
    info = {
        "session_type": session.session_type,
        "guest_id": None,
        "guest_name": None,
        "admin_id": None,
        "admin_username": None,
    }
    if isinstance(session, GuestSession):
        guest = ctx.db.get(Guest, session.guest_id)
        info["guest_id"] = session.guest_id
        info["guest_name"] = guest.name if guest else None
    elif isinstance(session, AdminSession):
        admin = ctx.db.get(Admin, session.admin_id)
        info["admin_id"] = session.admin_id
        info["admin_username"] = admin.username if admin else None
    return info
