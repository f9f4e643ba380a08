from uuid import UUID
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from ..schemas.base import CamelModel
from ..services.parameter_validator import MAX_INT
from ..users.models import UserResponse


class RegisterUserRequest(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    age: int = Field(gt=0, le=MAX_INT)
    gender: str = Field(min_length=1)

    @field_validator("name", "gender")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class TokenData(CamelModel):
    user_id: Optional[str] = None
    jti: Optional[str] = None

    # converts the token's string id into the UUID stored in the db
    def get_uuid(self) -> Optional[UUID]:
        if self.user_id:
            return UUID(self.user_id)
        return None
