# roombooking/schemas/auth.py
from datetime import datetime

from pydantic import BaseModel

from roombooking.models.user import UserRole


class LoginPayload(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    expires_at: datetime
    user_id: str
    username: str
    full_name: str
    role: UserRole
