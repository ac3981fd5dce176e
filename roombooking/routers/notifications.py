# roombooking/routers/notifications.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roombooking.db.session import get_db
from roombooking.models.user import User
from roombooking.routers.dependencies import get_current_user
from roombooking.schemas.notification import MessageOut, NotificationOut, UnreadCount
from roombooking.services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationOut])
def list_my_notifications(
    unread_only: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return notification_service.list_notifications(db, user.id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCount)
def get_unread_count(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UnreadCount(count=notification_service.unread_count(db, user.id))


@router.put("/mark-all-read", response_model=MessageOut)
def mark_all_read(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    count = notification_service.mark_all_read(db, user.id)
    return MessageOut(message=f"{count} notifications marked as read")


@router.put("/{notification_id}/mark-read", response_model=MessageOut)
def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification_service.mark_read(db, user.id, notification_id)
    return MessageOut(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageOut)
def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification_service.delete_notification(db, user.id, notification_id)
    return MessageOut(message="Notification deleted")
