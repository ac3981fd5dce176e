# roombooking/routers/users.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roombooking.db.session import get_db
from roombooking.errors import PermissionDeniedError
from roombooking.models.user import User
from roombooking.routers.dependencies import get_current_user, require_admin
from roombooking.schemas.notification import MessageOut
from roombooking.schemas.user import PasswordChange, ProfileUpdate, UserCreate, UserOut
from roombooking.services import user_service
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _require_self_or_admin(current: User, user_id: str) -> None:
    if not current.is_admin and current.id != user_id:
        logger.warning("User %s attempted to access user %s", current.id, user_id)
        raise PermissionDeniedError("You can only access your own profile")


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    logger.info("Admin %s creating user %s", admin.username, payload.username)
    return user_service.create_user(db, **payload.model_dump())


@router.get("", response_model=List[UserOut])
def list_users(
    include_inactive: bool = False,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return user_service.list_users(db, include_inactive=include_inactive)


@router.get("/profile", response_model=UserOut)
def get_my_profile(user: User = Depends(get_current_user)):
    return user


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    current: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _require_self_or_admin(current, user_id)
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_profile(
    user_id: str,
    payload: ProfileUpdate,
    current: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _require_self_or_admin(current, user_id)
    return user_service.update_profile(db, user_id, **payload.model_dump())


@router.post("/{user_id}/change-password", response_model=MessageOut)
def change_password(
    user_id: str,
    payload: PasswordChange,
    current: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if current.id != user_id:
        raise PermissionDeniedError("You can only change your own password")
    user_service.change_password(db, user_id, payload.current_password, payload.new_password)
    return MessageOut(message="Password changed successfully")
