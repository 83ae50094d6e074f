"""Guest RSVP endpoints."""

from fastapi import APIRouter, Depends

from guestlist.api.deps import get_context, require_guest
from guestlist.context import ServiceContext
from guestlist.schemas.rsvp import RsvpResponse, RsvpStatusResponse, SubmitRsvpRequest
from guestlist.services import rsvp_service
from guestlist.services.session_service import GuestSession

router = APIRouter(prefix="/rsvp", tags=["rsvp"])


@router.get("/status", response_model=RsvpStatusResponse)
def get_rsvp_status(
    guest: GuestSession = Depends(require_guest),
    ctx: ServiceContext = Depends(get_context),
):
    """Party size and current response for the logged-in guest."""
    return RsvpStatusResponse(**rsvp_service.get_rsvp_status(ctx, guest.guest_id))


@router.post("", response_model=RsvpResponse)
def submit_rsvp(
    request: SubmitRsvpRequest,
    guest: GuestSession = Depends(require_guest),
    ctx: ServiceContext = Depends(get_context),
):
    """Submit or replace the guest's RSVP."""
    return RsvpResponse(**rsvp_service.submit_rsvp(ctx, guest.guest_id, request.attendees))
