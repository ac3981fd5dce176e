# roombooking/schemas/notification.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from roombooking.models.notification import NotificationType


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    type: NotificationType
    is_read: bool
    booking_request_id: Optional[int] = None
    created_at: datetime


class UnreadCount(BaseModel):
    count: int


class MessageOut(BaseModel):
    message: str
