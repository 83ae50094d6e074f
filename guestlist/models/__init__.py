"""Guestlist Database Models."""

from guestlist.models.guest import Guest
from guestlist.models.admin import Admin
from guestlist.models.invite import InviteCode
from guestlist.models.session import AuthSession
from guestlist.models.rsvp import Rsvp, RsvpAttendee
from guestlist.models.event import Event

__all__ = [
    "Guest",
    "Admin",
    "InviteCode",
    "AuthSession",
    "Rsvp",
    "RsvpAttendee",
    "Event",
]
