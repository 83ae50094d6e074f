"""RSVP and attendee models."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

MEAL_CHOICES = ("beef", "chicken", "fish", "vegetarian", "vegan")


class Rsvp(SQLModel, table=True):
    __tablename__ = "rsvps"

    id: str = Field(default_factory=lambda: f"rsv_{secrets.token_hex(8)}", primary_key=True)
    guest_id: str = Field(foreign_key="guests.id", ondelete="CASCADE", unique=True, index=True)
    responded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RsvpAttendee(SQLModel, table=True):
    __tablename__ = "rsvp_attendees"

    id: str = Field(default_factory=lambda: f"att_{secrets.token_hex(8)}", primary_key=True)
    rsvp_id: str = Field(foreign_key="rsvps.id", ondelete="CASCADE", index=True)
    name: str
    is_attending: bool
    meal_preference: Optional[str] = None  # one of MEAL_CHOICES
    dietary_restrictions: Optional[str] = None
    is_primary: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
