"""Dashboard statistics."""

from datetime import datetime, timedelta, timezone

from guestlist.config import settings
from guestlist.context import ServiceContext
from guestlist.schemas.rsvp import AttendeeInput
from guestlist.services import rsvp_service, stats_service

from conftest import attendee, fixed_clock

T0 = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _respond(db, guest_id, rows, at):
    ctx = ServiceContext(db=db, settings=settings, clock=fixed_clock(at))
    rsvp_service.submit_rsvp(ctx, guest_id, [AttendeeInput(**r) for r in rows])


def test_empty_dashboard(ctx):
    stats = stats_service.dashboard_stats(ctx)
    assert stats == {
        "total_guests": 0,
        "total_expected_attendees": 0,
        "rsvp_count": 0,
        "pending_rsvps": 0,
        "attending_count": 0,
        "not_attending_count": 0,
        "recent_rsvps": [],
    }


def test_counts(ctx, db, make_guest):
    smith, _ = make_guest(name="Smith Family", party_size=4)
    jones, _ = make_guest(name="Jones", party_size=2)
    make_guest(name="Lee", party_size=3)

    _respond(db, smith, [
        attendee("John", primary=True), attendee("Jane"), attendee("Jimmy", attending=False, meal=None),
    ], T0)
    _respond(db, jones, [attendee("Pat", primary=True, attending=False, meal=None)], T0 + timedelta(hours=1))

    stats = stats_service.dashboard_stats(ctx)
    assert stats["total_guests"] == 3
    assert stats["total_expected_attendees"] == 9
    assert stats["rsvp_count"] == 2
    assert stats["pending_rsvps"] == 1
    assert stats["rsvp_count"] + stats["pending_rsvps"] == stats["total_guests"]
    assert stats["attending_count"] == 2
    assert stats["not_attending_count"] == 2


def test_recent_rsvps_newest_first_and_limited(ctx, db, make_guest):
    for i in range(7):
        guest_id, _ = make_guest(name=f"Guest {i}", party_size=2)
        _respond(db, guest_id, [attendee(f"Person {i}", primary=True)], T0 + timedelta(minutes=i))

    recent = stats_service.dashboard_stats(ctx)["recent_rsvps"]
    assert len(recent) == settings.recent_rsvps_limit
    assert [r["guest_name"] for r in recent] == [f"Guest {i}" for i in (6, 5, 4, 3, 2)]
    assert recent[0]["attending_count"] == 1
    assert recent[0]["not_attending_count"] == 0


def test_resubmission_moves_guest_to_top(ctx, db, make_guest):
    first, _ = make_guest(name="First")
    second, _ = make_guest(name="Second")
    _respond(db, first, [attendee("A", primary=True)], T0)
    _respond(db, second, [attendee("B", primary=True)], T0 + timedelta(minutes=1))
    _respond(db, first, [attendee("A", primary=True), attendee("C")], T0 + timedelta(minutes=2))

    stats = stats_service.dashboard_stats(ctx)
    assert stats["rsvp_count"] == 2
    assert [r["guest_name"] for r in stats["recent_rsvps"]] == ["First", "Second"]
    assert stats["recent_rsvps"][0]["attending_count"] == 2


def test_dashboard_endpoint(admin_client, make_guest):
    make_guest(party_size=5)
    r = admin_client.get("/admin/dashboard/stats")
    assert r.status_code == 200
    data = r.json()
    assert data["total_guests"] == 1
    assert data["total_expected_attendees"] == 5
    assert data["pending_rsvps"] == 1


def test_dashboard_requires_admin(client, make_guest):
    _, code = make_guest()
    client.post("/auth/code", json={"code": code})
    assert client.get("/admin/dashboard/stats").status_code == 401
