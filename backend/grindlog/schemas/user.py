from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from grindlog.schemas.common import CamelModel

EMAIL_REGX = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


# Schema for registering a user
class UserCreate(CamelModel):
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=3, max_length=50)
    display_name: Optional[str] = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("username", mode="before")
    @classmethod
    def trim_username(cls, value):
        return value.strip() if isinstance(value, str) else value


# Schema for login (JSON body)
class UserLogin(CamelModel):
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


# Schema for updating the current user's profile
class UserUpdate(CamelModel):
    display_name: Optional[str] = Field(None, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)


# Schema for returning a user (without password)
class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class PublicProfile(BaseModel):
    id: int
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# Schema for register / login responses
class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class RoleUpdate(CamelModel):
    role: str


class AdminUserRow(BaseModel):
    id: int
    email: str
    username: str
    display_name: Optional[str] = None
    role: str
    created_at: datetime
    workout_count: int = 0


class AdminUserPage(BaseModel):
    users: List[AdminUserRow]
    total: int
    limit: int
    offset: int
