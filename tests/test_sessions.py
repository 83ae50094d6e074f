"""Session manager: code exchange, lookup, expiry, upgrade and logout."""

from datetime import timedelta

import pytest
from sqlmodel import select

from guestlist.context import ServiceContext, utcnow
from guestlist.errors import NotFound, Unauthenticated
from guestlist.models.session import AuthSession
from guestlist.services import session_service
from guestlist.services.session_service import (
    AdminPendingSession,
    AdminSession,
    GuestSession,
)

from conftest import ADMIN_CODE, ADMIN_PASSWORD, ADMIN_USERNAME, fixed_clock, login_guest


# --- Service level ---

def test_guest_code_creates_guest_session(ctx, make_guest):
    guest_id, code = make_guest(name="Smith Family", code="SMITH2024")

    session, guest_name = session_service.exchange_code(ctx, code)

    assert isinstance(session, GuestSession)
    assert session.guest_id == guest_id
    assert guest_name == "Smith Family"
    assert session.expires_at > utcnow()


def test_admin_code_creates_pending_session(ctx, admin):
    session, guest_name = session_service.exchange_code(ctx, ADMIN_CODE)
    assert isinstance(session, AdminPendingSession)
    assert guest_name is None
    assert not hasattr(session, "guest_id") and not hasattr(session, "admin_id")


def test_unknown_code_creates_nothing(ctx):
    with pytest.raises(NotFound):
        session_service.exchange_code(ctx, "NOPE")
    assert ctx.db.exec(select(AuthSession)).all() == []


def test_tokens_are_unique_and_opaque(ctx, make_guest):
    _, code = make_guest()
    tokens = {session_service.exchange_code(ctx, code)[0].token for _ in range(10)}
    assert len(tokens) == 10
    assert all(len(t) == 64 for t in tokens)


@pytest.mark.parametrize("token", [None, "", "deadbeef"])
def test_missing_or_unknown_token_is_unauthenticated(ctx, token):
    with pytest.raises(Unauthenticated):
        session_service.get_session(ctx, token)


def test_expired_session_is_rejected_lazily(ctx, db, make_guest):
    _, code = make_guest()
    session, _ = session_service.exchange_code(ctx, code)

    later = ServiceContext(
        db=db,
        settings=ctx.settings,
        clock=fixed_clock(utcnow() + ctx.settings.session_ttl + timedelta(seconds=1)),
    )
    with pytest.raises(Unauthenticated):
        session_service.get_session(later, session.token)

    # Not swept: the row is still there until purged
    assert db.exec(select(AuthSession).where(AuthSession.token == session.token)).first()
    assert session_service.purge_expired(later) == 1
    assert db.exec(select(AuthSession)).all() == []


def test_upgrade_keeps_token(ctx, admin):
    pending, _ = session_service.exchange_code(ctx, ADMIN_CODE)

    upgraded = session_service.upgrade_to_admin(ctx, pending.token, admin)

    assert isinstance(upgraded, AdminSession)
    assert upgraded.token == pending.token
    assert upgraded.id == pending.id
    assert upgraded.admin_id == admin
    assert isinstance(session_service.get_session(ctx, pending.token), AdminSession)


def test_upgrade_rejects_guest_session(ctx, admin, make_guest):
    _, code = make_guest()
    guest_session, _ = session_service.exchange_code(ctx, code)
    with pytest.raises(Unauthenticated):
        session_service.upgrade_to_admin(ctx, guest_session.token, admin)


def test_revoke_is_immediate_and_idempotent(ctx, make_guest):
    _, code = make_guest()
    session, _ = session_service.exchange_code(ctx, code)

    session_service.revoke(ctx, session.token)
    session_service.revoke(ctx, session.token)
    session_service.revoke(ctx, None)

    with pytest.raises(Unauthenticated):
        session_service.get_session(ctx, session.token)


# --- HTTP ---

def test_code_endpoint_sets_cookie(client, make_guest):
    make_guest(code="SMITH2024")
    r = login_guest(client, "SMITH2024")
    assert r.json() == {"session_type": "guest", "guest_name": "Smith Family"}
    assert "session" in r.cookies


def test_invalid_code_is_404(client):
    r = client.post("/auth/code", json={"code": "WRONG"})
    assert r.status_code == 404
    assert r.json()["detail"]["error"] == "not_found"


def test_blank_code_is_400(client):
    r = client.post("/auth/code", json={"code": "   "})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "code"


def test_session_introspection_guest(client, make_guest):
    guest_id, code = make_guest()
    login_guest(client, code)

    r = client.get("/auth/session")
    assert r.status_code == 200
    data = r.json()
    assert data["session_type"] == "guest"
    assert data["guest_id"] == guest_id
    assert data["guest_name"] == "Smith Family"
    assert data["admin_id"] is None
    assert "token" not in data and "password_hash" not in data


def test_session_introspection_without_cookie(client):
    r = client.get("/auth/session")
    assert r.status_code == 401


def test_logout_revokes_session(client, make_guest):
    _, code = make_guest()
    login_guest(client, code)
    token = client.cookies.get("session")

    r = client.post("/auth/logout")
    assert r.status_code == 204

    # Cookie cleared locally; the old token is dead server-side as well
    assert client.get("/auth/session").status_code == 401
    r = client.get("/auth/session", headers={"Cookie": f"session={token}"})
    assert r.status_code == 401


def test_logout_without_session_is_noop(client):
    assert client.post("/auth/logout").status_code == 204


PENDING_BLOCKED = [
    ("get", "/events", None),
    ("get", "/rsvp/status", None),
    ("post", "/rsvp", {"attendees": []}),
    ("get", "/admin/guests", None),
    ("post", "/admin/guests", {"name": "X", "party_size": 1}),
    ("get", "/admin/guests/gst_x", None),
    ("put", "/admin/guests/gst_x", {"name": "X", "party_size": 1}),
    ("delete", "/admin/guests/gst_x", None),
    ("post", "/admin/guests/gst_x/regenerate-code", None),
    ("get", "/admin/events", None),
    ("delete", "/admin/events/evt_x", None),
    ("get", "/admin/dashboard/stats", None),
    ("post", "/admin/change-password", {"current_password": "a", "new_password": "b"}),
]


@pytest.mark.parametrize("method,path,body", PENDING_BLOCKED)
def test_admin_pending_is_locked_out(client, admin, method, path, body):
    r = client.post("/auth/code", json={"code": ADMIN_CODE})
    assert r.json()["session_type"] == "admin_pending"

    kwargs = {"json": body} if body is not None else {}
    r = client.request(method.upper(), path, **kwargs)
    assert r.status_code == 401, f"{method} {path}: {r.status_code} {r.text}"
    assert r.json() == {"detail": {"error": "unauthenticated", "message": "Unauthorized"}}


def test_admin_pending_can_introspect(client, admin):
    client.post("/auth/code", json={"code": ADMIN_CODE})
    r = client.get("/auth/session")
    assert r.status_code == 200
    assert r.json()["session_type"] == "admin_pending"
    assert r.json()["admin_id"] is None


def test_guest_cannot_reach_admin_routes(client, make_guest):
    _, code = make_guest()
    login_guest(client, code)
    assert client.get("/admin/guests").status_code == 401
    assert client.get("/admin/dashboard/stats").status_code == 401
    r = client.post("/auth/admin/login", json={"username": "admin", "password": "whatever"})
    assert r.status_code == 401


def test_admin_cannot_reach_guest_routes(admin_client):
    assert admin_client.get("/rsvp/status").status_code == 401
    assert admin_client.post("/rsvp", json={"attendees": []}).status_code == 401


def test_admin_login_flow_keeps_cookie(client, admin):
    client.post("/auth/code", json={"code": ADMIN_CODE})
    token = client.cookies.get("session")

    r = client.post("/auth/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    assert r.json() == {"username": "admin"}
    assert client.cookies.get("session") == token

    r = client.get("/auth/session")
    assert r.json()["session_type"] == "admin"
    assert r.json()["admin_id"] == admin
    assert r.json()["admin_username"] == "admin"
