# roombooking/schemas/user.py
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from roombooking.models.user import UserRole

_NAME_RE = re.compile(r"^[A-Za-z\s\-']+$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def _check_name(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return v
    if not _NAME_RE.match(v):
        raise ValueError("can only contain letters, spaces, hyphens, and apostrophes")
    return v


def _check_password(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[A-Z]", v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", v):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", v):
        raise ValueError("Password must contain at least one special character")
    return v


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: Optional[str] = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    role: UserRole = UserRole.EMPLOYEE

    @field_validator("username")
    def validate_username(cls, v: str) -> str:
        if not _USERNAME_RE.match(v):
            raise ValueError(
                "Username can only contain letters, numbers, dots, underscores, and hyphens"
            )
        return v

    @field_validator("first_name", "middle_name", "last_name")
    def validate_names(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v)

    @field_validator("password")
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=100)
    middle_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("first_name", "middle_name", "last_name")
    def validate_names(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v)


class PasswordChange(BaseModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    full_name: str
    phone: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None
