"""Event model."""

import secrets
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

EVENT_TYPES = ("ceremony", "reception", "rehearsal", "welcome", "brunch", "other")


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id: str = Field(default_factory=lambda: f"evt_{secrets.token_hex(8)}", primary_key=True)
    name: str
    event_type: str  # one of EVENT_TYPES
    event_date: date
    event_time: time
    location_name: str
    location_address: str
    description: Optional[str] = None
    display_order: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
