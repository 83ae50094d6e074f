"""Invite code registry: issue, validate and rotate invite codes.

A guest code maps to exactly one guest; an admin code maps to no guest and
only opens the admin login step. Codes are reusable until rotated.
"""

import logging
from dataclasses import dataclass
from typing import Union

from sqlmodel import select

from guestlist.context import ServiceContext
from guestlist.errors import Conflict, NotFound, ValidationError
from guestlist.models.guest import Guest
from guestlist.models.invite import CODE_TYPE_ADMIN, CODE_TYPE_GUEST, InviteCode
from guestlist.utils.security import generate_invite_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuestMatch:
    guest_id: str


@dataclass(frozen=True)
class AdminMatch:
    pass


CodeMatch = Union[GuestMatch, AdminMatch]


def normalize_code(code: str, field: str = "code") -> str:
    """Strip surrounding whitespace; every code is stored and matched this way."""
    cleaned = code.strip()
    if not cleaned:
        raise ValidationError("Code is required", field=field)
    return cleaned


def validate_code(ctx: ServiceContext, code: str) -> CodeMatch:
    """Exact-match lookup of a submitted code. Raises NotFound if unknown."""
    code = normalize_code(code)
    invite = ctx.db.exec(select(InviteCode).where(InviteCode.code == code)).first()
    if not invite:
        raise NotFound("Invalid code", field="code")

    if invite.code_type == CODE_TYPE_GUEST:
        if not invite.guest_id:
            raise RuntimeError(f"Guest code {invite.id} has no guest")
        return GuestMatch(guest_id=invite.guest_id)
    if invite.code_type == CODE_TYPE_ADMIN:
        return AdminMatch()
    raise RuntimeError(f"Unknown code type {invite.code_type!r} on {invite.id}")


def code_exists(ctx: ServiceContext, code: str) -> bool:
    return ctx.db.exec(select(InviteCode.id).where(InviteCode.code == code)).first() is not None


def _new_unique_code(ctx: ServiceContext, exclude: frozenset[str] = frozenset()) -> str:
    while True:
        code = generate_invite_code(
            ctx.settings.invite_code_length, ctx.settings.invite_code_alphabet
        )
        if code not in exclude and not code_exists(ctx, code):
            return code


def get_guest_code(ctx: ServiceContext, guest_id: str) -> str | None:
    return ctx.db.exec(
        select(InviteCode.code).where(
            InviteCode.guest_id == guest_id,
            InviteCode.code_type == CODE_TYPE_GUEST,
        )
    ).first()


def issue_guest_code(ctx: ServiceContext, guest_id: str, code: str | None = None) -> InviteCode:
    """Attach a code to a guest without committing.

    The caller owns the transaction so the guest row and its code land
    together.
    """
    if code is not None:
        code = normalize_code(code, field="invite_code")
        if code_exists(ctx, code):
            raise Conflict("Invite code already in use", field="invite_code")

    invite = InviteCode(
        code=code or _new_unique_code(ctx),
        code_type=CODE_TYPE_GUEST,
        guest_id=guest_id,
    )
    ctx.db.add(invite)
    ctx.db.flush()
    return invite


def issue_admin_code(ctx: ServiceContext, code: str) -> InviteCode:
    """Register an admin-path code without committing."""
    code = normalize_code(code)
    if code_exists(ctx, code):
        raise Conflict("Invite code already in use", field="code")

    invite = InviteCode(code=code, code_type=CODE_TYPE_ADMIN)
    ctx.db.add(invite)
    ctx.db.flush()
    return invite


def regenerate_code(ctx: ServiceContext, guest_id: str) -> str:
    """Replace a guest's code with a fresh one in a single commit.

    Readers see either the old code or the new one, never both and never
    neither.
    """
    if not ctx.db.get(Guest, guest_id):
        raise NotFound("Guest not found")

    old_codes = ctx.db.exec(
        select(InviteCode).where(
            InviteCode.guest_id == guest_id,
            InviteCode.code_type == CODE_TYPE_GUEST,
        )
    ).all()
    retired = frozenset(old.code for old in old_codes)
    for old in old_codes:
        ctx.db.delete(old)
    ctx.db.flush()

    new_code = _new_unique_code(ctx, exclude=retired)
    ctx.db.add(InviteCode(code=new_code, code_type=CODE_TYPE_GUEST, guest_id=guest_id))
    ctx.db.commit()

    logger.info("Regenerated invite code for guest %s", guest_id)
    return new_code
