from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from linkbio.core.usernames import USERNAME_MIN_LENGTH, USERNAME_PATTERN


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    invite_code: str = Field(min_length=1)
    username: str

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        if len(value) < USERNAME_MIN_LENGTH:
            raise ValueError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
        if not USERNAME_PATTERN.fullmatch(value):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return value


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    username: str
    message: str
