"""Guest administration: list, create, update, delete."""

import logging

from sqlmodel import col, func, select

from guestlist.context import ServiceContext, as_utc
from guestlist.errors import Conflict, NotFound, ValidationError
from guestlist.models.guest import Guest
from guestlist.models.rsvp import Rsvp, RsvpAttendee
from guestlist.services import invite_service, stats_service

logger = logging.getLogger(__name__)


def _check_party_size(party_size: int) -> None:
    if party_size < 1:
        raise ValidationError("Party size must be at least 1", field="party_size")


def get_guest(ctx: ServiceContext, guest_id: str) -> Guest:
    guest = ctx.db.get(Guest, guest_id)
    if not guest:
        raise NotFound("Guest not found")
    return guest


def guest_to_dict(ctx: ServiceContext, guest: Guest) -> dict:
    """Guest with its current invite code and RSVP summary."""
    return {
        "id": guest.id,
        "name": guest.name,
        "party_size": guest.party_size,
        "invite_code": invite_service.get_guest_code(ctx, guest.id),
        "rsvp": stats_service.guest_rsvp_summary(ctx, guest.id),
        "created_at": as_utc(guest.created_at).isoformat(),
    }


def list_guests(ctx: ServiceContext) -> list[dict]:
    guests = ctx.db.exec(select(Guest).order_by(col(Guest.created_at).desc())).all()
    return [guest_to_dict(ctx, g) for g in guests]


def create_guest(
    ctx: ServiceContext,
    name: str,
    party_size: int,
    invite_code: str | None = None,
) -> tuple[Guest, str]:
    """Create a guest and its invite code in one commit."""
    _check_party_size(party_size)
    if invite_code is not None:
        invite_code = invite_service.normalize_code(invite_code, field="invite_code")
        if invite_service.code_exists(ctx, invite_code):
            raise Conflict("Invite code already in use", field="invite_code")

    guest = Guest(name=name, party_size=party_size, created_at=ctx.now())
    ctx.db.add(guest)
    ctx.db.flush()

    invite = invite_service.issue_guest_code(ctx, guest.id, invite_code)
    code = invite.code
    ctx.db.commit()
    ctx.db.refresh(guest)

    logger.info("Created guest %s (party of %d)", guest.id, guest.party_size)
    return guest, code


def _attendee_count(ctx: ServiceContext, guest_id: str) -> int:
    return ctx.db.exec(
        select(func.count(RsvpAttendee.id))
        .join(Rsvp, col(Rsvp.id) == col(RsvpAttendee.rsvp_id))
        .where(Rsvp.guest_id == guest_id)
    ).one()


def update_guest(ctx: ServiceContext, guest_id: str, name: str, party_size: int) -> Guest:
    """Rename or resize a guest's party.

    Shrinking below the attendee count already on the RSVP is rejected.
    """
    _check_party_size(party_size)
    guest = get_guest(ctx, guest_id)

    responded = _attendee_count(ctx, guest.id)
    if party_size < responded:
        raise ValidationError(
            f"Party size cannot be smaller than the {responded} attendee(s) already on the RSVP",
            field="party_size",
        )

    guest.name = name
    guest.party_size = party_size
    ctx.db.add(guest)
    ctx.db.commit()
    ctx.db.refresh(guest)
    return guest


def delete_guest(ctx: ServiceContext, guest_id: str) -> None:
    """Delete a guest. Code, sessions and RSVP go with it via FK cascades."""
    guest = get_guest(ctx, guest_id)
    ctx.db.delete(guest)
    ctx.db.commit()
    ctx.db.expire_all()
    logger.info("Deleted guest %s", guest_id)
