"""Event schemas."""

from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

EventType = Literal["ceremony", "reception", "rehearsal", "welcome", "brunch", "other"]


class EventWriteRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    event_type: EventType
    event_date: date  # YYYY-MM-DD
    event_time: time  # HH:MM
    location_name: str = Field(min_length=1, max_length=200)
    location_address: str = Field(min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    display_order: int = 0

    @field_validator("event_time", mode="before")
    @classmethod
    def parse_time(cls, v):
        if isinstance(v, str):
            try:
                return datetime.strptime(v, "%H:%M").time()
            except ValueError:
                raise ValueError("Invalid time format. Use HH:MM") from None
        return v


class EventResponse(BaseModel):
    id: str
    name: str
    event_type: str
    event_date: str
    event_time: str
    location_name: str
    location_address: str
    description: Optional[str]
    display_order: int


class EventListResponse(BaseModel):
    events: list[EventResponse]
