from pydantic import EmailStr
from uuid import UUID
from datetime import datetime

from ..schemas.base import CamelModel


class UserResponse(CamelModel):
    """Public view of a user; the password hash is never part of it."""
    id: UUID
    name: str
    email: EmailStr
    age: int
    gender: str
    created_at: datetime


class UserEnvelope(CamelModel):
    user: UserResponse
