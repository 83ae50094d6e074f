"""Admin guest management, dashboard and settings endpoints."""

from fastapi import APIRouter, Depends, status

from guestlist.api.deps import get_context, require_admin
from guestlist.context import ServiceContext
from guestlist.schemas.auth import ChangePasswordRequest, ChangePasswordResponse
from guestlist.schemas.guest import (
    DashboardStatsResponse,
    GuestCreateRequest,
    GuestCreateResponse,
    GuestListResponse,
    GuestResponse,
    GuestUpdateRequest,
    RegenerateCodeResponse,
)
from guestlist.services import admin_service, guest_service, invite_service, stats_service
from guestlist.services.session_service import AdminSession

router = APIRouter(prefix="/admin", tags=["admin"])


# --- Guests ---

@router.get("/guests", response_model=GuestListResponse)
def list_guests(
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    """All guests with their invite codes and RSVP status."""
    guests = guest_service.list_guests(ctx)
    return GuestListResponse(guests=[GuestResponse(**g) for g in guests], total=len(guests))


@router.get("/guests/{guest_id}", response_model=GuestResponse)
def get_guest(
    guest_id: str,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    guest = guest_service.get_guest(ctx, guest_id)
    return GuestResponse(**guest_service.guest_to_dict(ctx, guest))


@router.post("/guests", response_model=GuestCreateResponse, status_code=status.HTTP_201_CREATED)
def create_guest(
    request: GuestCreateRequest,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    """Create a guest. A code is generated unless one is supplied."""
    guest, code = guest_service.create_guest(
        ctx, request.name, request.party_size, request.invite_code
    )
    return GuestCreateResponse(
        id=guest.id,
        name=guest.name,
        party_size=guest.party_size,
        invite_code=code,
    )


@router.put("/guests/{guest_id}", response_model=GuestResponse)
def update_guest(
    guest_id: str,
    request: GuestUpdateRequest,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    guest = guest_service.update_guest(ctx, guest_id, request.name, request.party_size)
    return GuestResponse(**guest_service.guest_to_dict(ctx, guest))


@router.delete("/guests/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest(
    guest_id: str,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    """Delete a guest along with their code, sessions and RSVP."""
    guest_service.delete_guest(ctx, guest_id)


@router.post("/guests/{guest_id}/regenerate-code", response_model=RegenerateCodeResponse)
def regenerate_code(
    guest_id: str,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    """Rotate a guest's invite code. The old code stops working immediately."""
    return RegenerateCodeResponse(invite_code=invite_service.regenerate_code(ctx, guest_id))


# --- Dashboard ---

@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def dashboard_stats(
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    return DashboardStatsResponse(**stats_service.dashboard_stats(ctx))


# --- Settings ---

@router.post("/change-password", response_model=ChangePasswordResponse)
def change_password(
    request: ChangePasswordRequest,
    admin: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    admin_service.change_password(ctx, admin, request.current_password, request.new_password)
    return ChangePasswordResponse(message="Password changed successfully")
