"""Event listing and admin event management endpoints."""

from fastapi import APIRouter, Depends, status

from guestlist.api.deps import get_context, require_admin, require_authenticated
from guestlist.context import ServiceContext
from guestlist.schemas.event import EventListResponse, EventResponse, EventWriteRequest
from guestlist.services import event_service
from guestlist.services.session_service import AdminSession, CurrentSession

router = APIRouter(tags=["events"])


@router.get("/events", response_model=EventListResponse)
def list_events(
    _: CurrentSession = Depends(require_authenticated),
    ctx: ServiceContext = Depends(get_context),
):
    """Event schedule for invited guests."""
    events = event_service.list_events(ctx)
    return EventListResponse(events=[EventResponse(**event_service.event_to_dict(e)) for e in events])


@router.get("/admin/events", response_model=EventListResponse)
def list_admin_events(
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    events = event_service.list_events(ctx)
    return EventListResponse(events=[EventResponse(**event_service.event_to_dict(e)) for e in events])


@router.get("/admin/events/{event_id}", response_model=EventResponse)
def get_event(
    event_id: str,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    return EventResponse(**event_service.event_to_dict(event_service.get_event(ctx, event_id)))


@router.post("/admin/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    request: EventWriteRequest,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    """Create an event. Admin only."""
    event = event_service.create_event(ctx, **request.model_dump())
    return EventResponse(**event_service.event_to_dict(event))


@router.put("/admin/events/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    request: EventWriteRequest,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    event = event_service.update_event(ctx, event_id, **request.model_dump())
    return EventResponse(**event_service.event_to_dict(event))


@router.delete("/admin/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    _: AdminSession = Depends(require_admin),
    ctx: ServiceContext = Depends(get_context),
):
    event_service.delete_event(ctx, event_id)
