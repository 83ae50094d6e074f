"""RSVP business logic.

A guest's RSVP is one ``rsvps`` row plus the full attendee list. Every
submission replaces the list wholesale (delete all, insert all) in a single
commit; per-attendee history is not kept.
"""

import logging
from typing import Sequence

from sqlmodel import col, select

from guestlist.context import ServiceContext, as_utc
from guestlist.errors import (
    InvalidAttendeeName,
    InvalidDietaryRestrictions,
    InvalidMealPreference,
    MissingMealPreference,
    MissingPrimaryAttendee,
    NotFound,
    PartySizeExceeded,
)
from guestlist.models.guest import Guest
from guestlist.models.rsvp import MEAL_CHOICES, Rsvp, RsvpAttendee
from guestlist.schemas.rsvp import AttendeeInput

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_DIETARY_LENGTH = 500


def validate_attendees(attendees: Sequence[AttendeeInput], party_size: int) -> None:
    """Raise the first rule the submission breaks.

    Party size is checked before content, so an oversized party is always
    reported as such.
    """
    if len(attendees) > party_size:
        raise PartySizeExceeded(
            f"Cannot have more than {party_size} attendees", field="attendees"
        )

    for i, att in enumerate(attendees):
        name = att.name.strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise InvalidAttendeeName(
                f"Name must be 1-{MAX_NAME_LENGTH} characters", field=f"attendees[{i}].name"
            )

    primary_count = sum(1 for att in attendees if att.is_primary)
    if primary_count != 1:
        raise MissingPrimaryAttendee(
            "Exactly one attendee must be marked as primary", field="attendees"
        )

    for i, att in enumerate(attendees):
        if att.is_attending and att.meal_preference is None:
            raise MissingMealPreference(
                "Attending guests must choose a meal", field=f"attendees[{i}].meal_preference"
            )

    for i, att in enumerate(attendees):
        if att.meal_preference is not None and att.meal_preference not in MEAL_CHOICES:
            raise InvalidMealPreference(
                f"Invalid meal preference: {att.meal_preference}",
                field=f"attendees[{i}].meal_preference",
            )
        if att.dietary_restrictions and len(att.dietary_restrictions) > MAX_DIETARY_LENGTH:
            raise InvalidDietaryRestrictions(
                f"Dietary restrictions must be under {MAX_DIETARY_LENGTH} characters",
                field=f"attendees[{i}].dietary_restrictions",
            )


def _get_guest(ctx: ServiceContext, guest_id: str) -> Guest:
    guest = ctx.db.get(Guest, guest_id)
    if not guest:
        raise NotFound("Guest not found")
    return guest


def _get_rsvp(ctx: ServiceContext, guest_id: str) -> Rsvp | None:
    return ctx.db.exec(select(Rsvp).where(Rsvp.guest_id == guest_id)).first()


def _get_attendees(ctx: ServiceContext, rsvp_id: str) -> list[RsvpAttendee]:
    return list(ctx.db.exec(
        select(RsvpAttendee)
        .where(RsvpAttendee.rsvp_id == rsvp_id)
        .order_by(col(RsvpAttendee.is_primary).desc(), col(RsvpAttendee.name).asc())
    ).all())


def _rsvp_to_dict(rsvp: Rsvp, attendees: list[RsvpAttendee]) -> dict:
    return {
        "id": rsvp.id,
        "guest_id": rsvp.guest_id,
        "responded_at": as_utc(rsvp.responded_at).isoformat(),
        "updated_at": as_utc(rsvp.updated_at).isoformat(),
        "attendees": [
            {
                "id": a.id,
                "name": a.name,
                "is_attending": a.is_attending,
                "meal_preference": a.meal_preference,
                "dietary_restrictions": a.dietary_restrictions,
                "is_primary": a.is_primary,
            }
            for a in attendees
        ],
    }


def get_rsvp_status(ctx: ServiceContext, guest_id: str) -> dict:
    """Current RSVP for a guest, or has_responded=False. Read only."""
    guest = _get_guest(ctx, guest_id)
    rsvp = _get_rsvp(ctx, guest.id)

    return {
        "guest_name": guest.name,
        "party_size": guest.party_size,
        "has_responded": rsvp is not None,
        "rsvp": _rsvp_to_dict(rsvp, _get_attendees(ctx, rsvp.id)) if rsvp else None,
    }


def submit_rsvp(ctx: ServiceContext, guest_id: str, attendees: Sequence[AttendeeInput]) -> dict:
    """Validate, then replace the guest's attendee list atomically.

    Nothing is written unless every rule passes. Submitting the same list
    twice leaves exactly that list stored.
    """
    guest = _get_guest(ctx, guest_id)
    validate_attendees(attendees, guest.party_size)

    now = ctx.now()
    rsvp = _get_rsvp(ctx, guest.id)
    if rsvp is None:
        rsvp = Rsvp(guest_id=guest.id, responded_at=now, created_at=now, updated_at=now)
        ctx.db.add(rsvp)
    else:
        for old in _get_attendees(ctx, rsvp.id):
            ctx.db.delete(old)
        rsvp.responded_at = now
        rsvp.updated_at = now
        ctx.db.add(rsvp)
    ctx.db.flush()

    for att in attendees:
        ctx.db.add(RsvpAttendee(
            rsvp_id=rsvp.id,
            name=att.name.strip(),
            is_attending=att.is_attending,
            meal_preference=att.meal_preference,
            dietary_restrictions=att.dietary_restrictions or None,
            is_primary=att.is_primary,
            created_at=now,
        ))

    ctx.db.commit()
    ctx.db.refresh(rsvp)

    logger.info("Guest %s submitted RSVP with %d attendee(s)", guest.id, len(attendees))
    return _rsvp_to_dict(rsvp, _get_attendees(ctx, rsvp.id))
