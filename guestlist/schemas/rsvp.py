"""RSVP request/response schemas."""

from typing import Optional

from pydantic import BaseModel


class AttendeeInput(BaseModel):
    # Content rules (trimmed name, meal choice, lengths) are enforced by the
    # RSVP service so the party-size check can run first.
    name: str
    is_attending: bool
    meal_preference: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    is_primary: bool = False


class SubmitRsvpRequest(BaseModel):
    attendees: list[AttendeeInput]


class AttendeeResponse(BaseModel):
    id: str
    name: str
    is_attending: bool
    meal_preference: Optional[str]
    dietary_restrictions: Optional[str]
    is_primary: bool


class RsvpResponse(BaseModel):
    id: str
    guest_id: str
    responded_at: str
    updated_at: str
    attendees: list[AttendeeResponse]


class RsvpStatusResponse(BaseModel):
    guest_name: str
    party_size: int
    has_responded: bool
    rsvp: Optional[RsvpResponse] = None
