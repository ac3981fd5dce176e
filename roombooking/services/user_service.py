# roombooking/services/user_service.py
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from roombooking.db.repository import BookingRepository
from roombooking.errors import DuplicateUser, InvalidPassword, UserNotFound
from roombooking.models.user import User, UserRole
from roombooking.services.passwords import hash_password, verify_password
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)


def _new_user_id(role: UserRole) -> str:
    prefix = "admin" if role == UserRole.ADMIN else "emp"
    return f"{prefix}-{uuid.uuid4().hex}"


def get_user(db: Session, user_id: str) -> User:
    user = BookingRepository(db).find_user(user_id)
    if user is None:
        logger.warning("User %s not found", user_id)
        raise UserNotFound(user_id)
    return user


def list_users(db: Session, include_inactive: bool = False) -> List[User]:
    return BookingRepository(db).list_users(include_inactive=include_inactive)


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    middle_name: Optional[str] = None,
    phone: Optional[str] = None,
    role: UserRole = UserRole.EMPLOYEE,
) -> User:
    logger.info("Creating user %s with role %s", username, role.value)
    repo = BookingRepository(db)

    if repo.find_user_by_username(username) is not None:
        raise DuplicateUser(
            "Username already exists",
            f"A user with username '{username}' already exists",
        )
    if repo.find_user_by_email(email) is not None:
        raise DuplicateUser(
            "Email already exists",
            f"A user with email '{email}' already exists",
        )

    user = User(
        id=_new_user_id(role),
        username=username,
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        middle_name=middle_name or None,
        last_name=last_name,
        phone=phone,
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s created with username %s", user.id, user.username)
    return user


def update_profile(
    db: Session,
    user_id: str,
    *,
    first_name: Optional[str] = None,
    middle_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> User:
    """Only provided fields change; an empty middle name clears it."""
    user = get_user(db, user_id)

    if email and email != user.email:
        existing = BookingRepository(db).find_user_by_email(email)
        if existing is not None and existing.id != user_id:
            raise DuplicateUser(
                "Email already exists",
                f"A user with email '{email}' already exists",
            )
        user.email = email

    if first_name:
        user.first_name = first_name
    if middle_name is not None:
        user.middle_name = middle_name or None
    if last_name:
        user.last_name = last_name
    if phone is not None:
        user.phone = phone or None
    if profile_image_url is not None:
        user.profile_image_url = profile_image_url or None

    db.commit()
    db.refresh(user)
    logger.info("Profile updated for user %s", user_id)
    return user


def change_password(db: Session, user_id: str, current_password: str, new_password: str) -> None:
    user = get_user(db, user_id)
    if not verify_password(current_password, user.password_hash):
        logger.warning("Invalid current password for user %s", user_id)
        raise InvalidPassword(
            "Invalid current password",
            "The current password you entered is incorrect",
        )
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for user %s", user_id)


def ensure_admin(db: Session, username: str, password: str) -> User:
    """Create the seed admin unless a user with that username exists."""
    existing = BookingRepository(db).find_user_by_username(username)
    if existing is not None:
        return existing
    return create_user(
        db,
        username=username,
        email=f"{username}@localhost",
        password=password,
        first_name="System",
        last_name="Administrator",
        role=UserRole.ADMIN,
    )
