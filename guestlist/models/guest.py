"""Guest model."""

import secrets
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class Guest(SQLModel, table=True):
    __tablename__ = "guests"

    id: str = Field(default_factory=lambda: f"gst_{secrets.token_hex(8)}", primary_key=True)
    name: str
    party_size: int = Field(default=1)  # max attendees on the RSVP
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
