"""Event catalogue CRUD."""

from sqlmodel import col, select

from guestlist.context import ServiceContext
from guestlist.errors import NotFound
from guestlist.models.event import Event


def event_to_dict(event: Event) -> dict:
    return {
        "id": event.id,
        "name": event.name,
        "event_type": event.event_type,
        "event_date": event.event_date.isoformat(),
        "event_time": event.event_time.strftime("%H:%M"),
        "location_name": event.location_name,
        "location_address": event.location_address,
        "description": event.description,
        "display_order": event.display_order,
    }


def list_events(ctx: ServiceContext) -> list[Event]:
    return list(ctx.db.exec(
        select(Event).order_by(
            col(Event.display_order).asc(),
            col(Event.event_date).asc(),
            col(Event.event_time).asc(),
        )
    ).all())


def get_event(ctx: ServiceContext, event_id: str) -> Event:
    event = ctx.db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


def create_event(ctx: ServiceContext, **fields) -> Event:
    event = Event(**fields)
    ctx.db.add(event)
    ctx.db.commit()
    ctx.db.refresh(event)
    return event


def update_event(ctx: ServiceContext, event_id: str, **fields) -> Event:
    event = get_event(ctx, event_id)
    for key, value in fields.items():
        setattr(event, key, value)
    ctx.db.add(event)
    ctx.db.commit()
    ctx.db.refresh(event)
    return event


def delete_event(ctx: ServiceContext, event_id: str) -> None:
    event = get_event(ctx, event_id)
    ctx.db.delete(event)
    ctx.db.commit()
