"""Admin guest management schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GuestCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    party_size: int = Field(ge=1, le=20)
    invite_code: Optional[str] = Field(default=None, min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("invite_code")
    @classmethod
    def strip_code(cls, v: Optional[str]) -> Optional[str]:
        # Redeemed codes are stripped too, so padding would never match
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Code must not be blank")
        return v


class GuestUpdateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    party_size: int = Field(ge=1, le=20)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class GuestRsvpSummary(BaseModel):
    has_responded: bool
    responded_at: Optional[str]
    attending_count: int
    not_attending_count: int


class GuestResponse(BaseModel):
    id: str
    name: str
    party_size: int
    invite_code: Optional[str]
    rsvp: GuestRsvpSummary
    created_at: str


class GuestListResponse(BaseModel):
    guests: list[GuestResponse]
    total: int


class GuestCreateResponse(BaseModel):
    id: str
    name: str
    party_size: int
    invite_code: str


class RegenerateCodeResponse(BaseModel):
    invite_code: str


# --- Dashboard ---

class RecentRsvp(BaseModel):
    guest_name: str
    responded_at: str
    attending_count: int
    not_attending_count: int


class DashboardStatsResponse(BaseModel):
    total_guests: int
    total_expected_attendees: int
    rsvp_count: int
    pending_rsvps: int
    attending_count: int
    not_attending_count: int
    recent_rsvps: list[RecentRsvp]
