from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.validators import validate_email, validate_username


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime
    permissions: list[str] = []

    model_config = {"from_attributes": True}


# ── Self-registration (always a Customer account) ───────────

class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return validate_email(v)


# ── Login ────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    """`username` accepts either the username or the email address."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserOut


# ── Token refresh ────────────────────────────────────────────

class RefreshRequest(BaseModel):
    refresh_token: str
