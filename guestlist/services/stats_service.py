"""Dashboard statistics, recomputed on every request."""

from sqlalchemy import case
from sqlmodel import col, func, select

from guestlist.context import ServiceContext, as_utc
from guestlist.models.guest import Guest
from guestlist.models.rsvp import Rsvp, RsvpAttendee

_attending = func.coalesce(func.sum(case((col(RsvpAttendee.is_attending), 1), else_=0)), 0)
_declining = func.coalesce(func.sum(case((col(RsvpAttendee.is_attending), 0), else_=1)), 0)


def dashboard_stats(ctx: ServiceContext, recent_limit: int | None = None) -> dict:
    """Aggregate guest and RSVP counts plus the latest responses.

    rsvp_count + pending_rsvps always equals total_guests within one call.
    """
    if recent_limit is None:
        recent_limit = ctx.settings.recent_rsvps_limit

    total_guests, total_expected = ctx.db.exec(
        select(func.count(Guest.id), func.coalesce(func.sum(Guest.party_size), 0))
    ).one()

    rsvp_count = ctx.db.exec(select(func.count(Rsvp.id))).one()

    attending_count, not_attending_count = ctx.db.exec(
        select(_attending, _declining).select_from(RsvpAttendee)
    ).one()

    recent = ctx.db.exec(
        select(Guest.name, Rsvp.responded_at, _attending, func.count(RsvpAttendee.id) - _attending)
        .select_from(Rsvp)
        .join(Guest, col(Guest.id) == col(Rsvp.guest_id))
        .outerjoin(RsvpAttendee, col(RsvpAttendee.rsvp_id) == col(Rsvp.id))
        .group_by(Rsvp.id, Guest.name, Rsvp.responded_at)
        .order_by(col(Rsvp.responded_at).desc())
        .limit(recent_limit)
    ).all()

    return {
        "total_guests": total_guests,
        "total_expected_attendees": total_expected,
        "rsvp_count": rsvp_count,
        "pending_rsvps": total_guests - rsvp_count,
        "attending_count": attending_count,
        "not_attending_count": not_attending_count,
        "recent_rsvps": [
            {
                "guest_name": name,
                "responded_at": as_utc(responded_at).isoformat(),
                "attending_count": attending,
                "not_attending_count": declining,
            }
            for name, responded_at, attending, declining in recent
        ],
    }


def guest_rsvp_summary(ctx: ServiceContext, guest_id: str) -> dict:
    """Per-guest RSVP summary for the admin guest list."""
    rsvp = ctx.db.exec(select(Rsvp).where(Rsvp.guest_id == guest_id)).first()
    if not rsvp:
        return {
            "has_responded": False,
            "responded_at": None,
            "attending_count": 0,
            "not_attending_count": 0,
        }

    attending, declining = ctx.db.exec(
        select(_attending, _declining)
        .select_from(RsvpAttendee)
        .where(RsvpAttendee.rsvp_id == rsvp.id)
    ).one()
    return {
        "has_responded": True,
        "responded_at": as_utc(rsvp.responded_at).isoformat(),
        "attending_count": attending,
        "not_attending_count": declining,
    }
