"""Guestlist command line: database setup and out-of-band seeding.

Usage:
    guestlist init-db
    guestlist create-admin <username> --code <admin-code> [--password <pw>]
    guestlist create-guest <name> <party_size> [--code <code>]
    guestlist purge-sessions
    guestlist serve [--host H] [--port P]
"""

import argparse
import logging
import sys

from sqlmodel import Session

from guestlist.config import configure_logging, settings
from guestlist.context import ServiceContext
from guestlist.database import engine, init_db
from guestlist.errors import GuestlistError
from guestlist.services import admin_service, guest_service, invite_service, session_service
from guestlist.utils.security import generate_password

logger = logging.getLogger(__name__)


def _context(session: Session) -> ServiceContext:
    return ServiceContext(db=session, settings=settings)


def cmd_init_db(args: argparse.Namespace) -> int:
    init_db()
    print(f"Database ready at {settings.db_path}")
    return 0


def cmd_create_admin(args: argparse.Namespace) -> int:
    init_db()
    password = args.password or generate_password(settings.generated_password_length)
    code = invite_service.normalize_code(args.code)
    with Session(engine) as session:
        admin = admin_service.create_admin(_context(session), args.username, password, code=code)
        username = admin.username

    print("Admin created:")
    print(f"  Username: {username}")
    if not args.password:
        print(f"  Password: {password}")
    print(f"  Code:     {code}")
    return 0


def cmd_create_guest(args: argparse.Namespace) -> int:
    init_db()
    with Session(engine) as session:
        guest, code = guest_service.create_guest(
            _context(session), args.name.strip(), args.party_size, args.code
        )

    print("Guest created:")
    print(f"  Name:       {guest.name}")
    print(f"  Party size: {guest.party_size}")
    print(f"  Code:       {code}")
    return 0


def cmd_purge_sessions(args: argparse.Namespace) -> int:
    with Session(engine) as session:
        removed = session_service.purge_expired(_context(session))
    print(f"Removed {removed} expired session(s)")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("guestlist.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="guestlist", description="Guestlist administration")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create database tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("create-admin", help="Create an admin and its login code")
    p.add_argument("username")
    p.add_argument("--code", required=True, help="Admin invite code")
    p.add_argument("--password", help="Password (generated when omitted)")
    p.set_defaults(func=cmd_create_admin)

    p = sub.add_parser("create-guest", help="Create a guest with an invite code")
    p.add_argument("name")
    p.add_argument("party_size", type=int)
    p.add_argument("--code", help="Invite code (generated when omitted)")
    p.set_defaults(func=cmd_create_guest)

    p = sub.add_parser("purge-sessions", help="Delete expired sessions")
    p.set_defaults(func=cmd_purge_sessions)

    p = sub.add_parser("serve", help="Run the HTTP server")
    p.add_argument("--host", default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except GuestlistError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
