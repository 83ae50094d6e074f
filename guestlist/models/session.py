"""Auth session model."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

SESSION_GUEST = "guest"
SESSION_ADMIN_PENDING = "admin_pending"
SESSION_ADMIN = "admin"


class AuthSession(SQLModel, table=True):
    __tablename__ = "sessions"
    __table_args__ = (
        CheckConstraint(
            "(session_type = 'guest' AND guest_id IS NOT NULL AND admin_id IS NULL)"
            " OR (session_type = 'admin_pending' AND guest_id IS NULL AND admin_id IS NULL)"
            " OR (session_type = 'admin' AND guest_id IS NULL AND admin_id IS NOT NULL)",
            name="sessions_shape",
        ),
    )

    id: str = Field(default_factory=lambda: f"ses_{secrets.token_hex(8)}", primary_key=True)
    token: str = Field(unique=True, index=True)
    session_type: str  # 'guest' | 'admin_pending' | 'admin'
    guest_id: Optional[str] = Field(
        default=None, foreign_key="guests.id", ondelete="CASCADE", index=True
    )
    admin_id: Optional[str] = Field(
        default=None, foreign_key="admins.id", ondelete="CASCADE", index=True
    )
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
