"""Invite code model."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

CODE_TYPE_GUEST = "guest"
CODE_TYPE_ADMIN = "admin"


class InviteCode(SQLModel, table=True):
    __tablename__ = "invite_codes"
    __table_args__ = (
        CheckConstraint(
            "(code_type = 'guest' AND guest_id IS NOT NULL)"
            " OR (code_type = 'admin' AND guest_id IS NULL)",
            name="invite_codes_shape",
        ),
    )

    id: str = Field(default_factory=lambda: f"inv_{secrets.token_hex(8)}", primary_key=True)
    code: str = Field(unique=True, index=True)
    code_type: str  # 'guest' | 'admin'
    guest_id: Optional[str] = Field(
        default=None, foreign_key="guests.id", ondelete="CASCADE", index=True
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
