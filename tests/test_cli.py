"""Command line seeding."""

from guestlist.cli import main
from guestlist.services import admin_service, invite_service
from guestlist.services.invite_service import AdminMatch, GuestMatch


def test_create_guest_with_code(ctx, capsys):
    assert main(["create-guest", "Lee Family", "3", "--code", "LEE2026"]) == 0
    out = capsys.readouterr().out
    assert "LEE2026" in out
    assert isinstance(invite_service.validate_code(ctx, "LEE2026"), GuestMatch)


def test_create_admin_generates_password(ctx, capsys):
    assert main(["create-admin", "planner", "--code", "PLAN-GATE"]) == 0
    out = capsys.readouterr().out
    assert "Username: planner" in out
    assert "Password: " in out
    assert isinstance(invite_service.validate_code(ctx, "PLAN-GATE"), AdminMatch)


def test_taken_code_fails_cleanly(make_guest, capsys):
    make_guest(code="SMITH2024")
    assert main(["create-admin", "planner", "--code", "SMITH2024"]) == 1
    assert "already in use" in capsys.readouterr().err


def test_purge_sessions(capsys):
    assert main(["purge-sessions"]) == 0
    assert "Removed 0 expired session(s)" in capsys.readouterr().out


def test_padded_codes_are_trimmed(ctx, capsys):
    assert main(["create-guest", "Pad", "1", "--code", " PAD1 "]) == 0
    assert main(["create-admin", "planner", "--code", " PLAN-GATE "]) == 0
    out = capsys.readouterr().out
    assert "Code:       PAD1\n" in out
    assert "Code:     PLAN-GATE\n" in out
    assert isinstance(invite_service.validate_code(ctx, "PAD1"), GuestMatch)
    assert isinstance(invite_service.validate_code(ctx, "PLAN-GATE"), AdminMatch)


def test_failed_admin_creation_leaves_nothing(ctx, make_guest, capsys):
    make_guest(code="SMITH2024")
    assert main(["create-admin", "planner", "--code", "SMITH2024"]) == 1
    assert admin_service.get_admin_by_username(ctx, "planner") is None
