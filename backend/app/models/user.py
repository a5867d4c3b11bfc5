import enum
from datetime import datetime

from pydantic import Field

from app.models.base import Record, utcnow


class UserRole(str, enum.Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


class User(Record):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=255)
    password_hash: str
    role: UserRole = UserRole.CUSTOMER
    created_at: datetime = Field(default_factory=utcnow)
