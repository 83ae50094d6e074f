"""Shared fixtures: temporary database, service context, seeded guests/admins."""

import os
import tempfile
from datetime import datetime, timezone

# Setup environment for testing (before any guestlist import)
os.environ["GUESTLIST_DATA_DIR"] = tempfile.mkdtemp()
os.environ["GUESTLIST_DB_PATH"] = os.path.join(os.environ["GUESTLIST_DATA_DIR"], "test.db")
os.environ["GUESTLIST_COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from guestlist.config import settings
from guestlist.context import ServiceContext
from guestlist.database import engine
from guestlist.main import app
from guestlist.services import admin_service, guest_service

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"
ADMIN_CODE = "ADMIN-GATE"


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def db():
    with Session(engine) as session:
        yield session


@pytest.fixture
def ctx(db):
    return ServiceContext(db=db, settings=settings)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_guest(ctx):
    """Create a guest; returns (guest_id, code)."""
    def _make(name="Smith Family", party_size=4, code=None):
        guest, invite_code = guest_service.create_guest(ctx, name, party_size, code)
        return guest.id, invite_code
    return _make


@pytest.fixture
def admin(ctx):
    """An admin account plus its admin-path invite code."""
    created = admin_service.create_admin(ctx, ADMIN_USERNAME, ADMIN_PASSWORD, code=ADMIN_CODE)
    return created.id


def login_guest(client: TestClient, code: str):
    r = client.post("/auth/code", json={"code": code})
    assert r.status_code == 200, f"code exchange failed: {r.status_code} {r.text}"
    return r


def login_admin(client: TestClient, password: str = ADMIN_PASSWORD):
    r = client.post("/auth/code", json={"code": ADMIN_CODE})
    assert r.status_code == 200, f"admin code failed: {r.status_code} {r.text}"
    assert r.json()["session_type"] == "admin_pending"
    r = client.post("/auth/admin/login", json={"username": ADMIN_USERNAME, "password": password})
    return r


@pytest.fixture
def admin_client(client, admin):
    r = login_admin(client)
    assert r.status_code == 200, f"admin login failed: {r.status_code} {r.text}"
    return client


def attendee(name, primary=False, attending=True, meal="chicken", dietary=None):
    return {
        "name": name,
        "is_primary": primary,
        "is_attending": attending,
        "meal_preference": meal,
        "dietary_restrictions": dietary,
    }


def fixed_clock(moment: datetime):
    return lambda: moment.astimezone(timezone.utc)
