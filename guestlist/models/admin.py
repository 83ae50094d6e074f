"""Admin model."""

import secrets
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class Admin(SQLModel, table=True):
    __tablename__ = "admins"

    id: str = Field(default_factory=lambda: f"adm_{secrets.token_hex(8)}", primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
