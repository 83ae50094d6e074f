"""Auth and session request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


# --- Invite code ---

class ValidateCodeRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Code is required")
        return v


class ValidateCodeResponse(BaseModel):
    session_type: str  # 'guest' | 'admin_pending'
    guest_name: Optional[str] = None


# --- Admin login ---

class AdminLoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class AdminLoginResponse(BaseModel):
    username: str


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str


class ChangePasswordResponse(BaseModel):
    message: str


# --- Session ---

class SessionResponse(BaseModel):
    session_type: str  # 'guest' | 'admin_pending' | 'admin'
    guest_id: Optional[str] = None
    guest_name: Optional[str] = None
    admin_id: Optional[str] = None
    admin_username: Optional[str] = None
