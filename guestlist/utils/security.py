"""Security utilities: password hashing, session tokens, invite codes."""

import secrets
import string

import bcrypt

# Checked against when a username is unknown so both login failures cost the same
_DUMMY_HASH = bcrypt.hashpw(b"guestlist-dummy-password", bcrypt.gensalt()).decode()


# --- Password Hashing ---

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str | None) -> bool:
    """Constant-time bcrypt check. A missing or malformed hash never matches."""
    if not hashed:
        bcrypt.checkpw(password.encode(), _DUMMY_HASH.encode())
        return False
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


def generate_password(length: int = 16) -> str:
    """Random admin password without look-alike characters."""
    alphabet = "abcdefghijkmnpqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ23456789"
    return "".join(secrets.choice(alphabet) for _ in range(length))


# --- Session Tokens ---

def generate_session_token() -> str:
    """Opaque 256-bit token, hex encoded."""
    return secrets.token_hex(32)


# --- Invite Codes ---

def generate_invite_code(length: int = 6, alphabet: str = string.ascii_uppercase + string.digits) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))
