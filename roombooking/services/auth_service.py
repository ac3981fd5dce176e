# roombooking/services/auth_service.py
"""Username/password login issuing opaque bearer tokens."""

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from roombooking.config import Settings, get_settings
from roombooking.db.repository import BookingRepository
from roombooking.errors import AuthenticationError
from roombooking.models.user import User
from roombooking.services.passwords import verify_password
from roombooking.utils.logger import get_logger


logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    user_id: str
    expires_at: datetime


class AuthService:
    """Verifies credentials and resolves bearer tokens to users."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._tokens: Dict[str, IssuedToken] = {}
        self._lock = threading.Lock()

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self._settings.AUTH_TOKEN_TTL_MINUTES)

    def login(self, db: Session, username: str, password: str) -> tuple[IssuedToken, User]:
        logger.info("Login attempt for user %s", username)
        user = BookingRepository(db).find_user_by_username(username)
        if user is None or not user.is_active:
            logger.warning("Login failed: user %s not found or inactive", username)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: invalid password for user %s", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        now = datetime.utcnow()
        user.last_login_at = now
        db.commit()
        db.refresh(user)

        issued = IssuedToken(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=now + self.token_ttl,
        )
        with self._lock:
            self._purge_expired(now)
            self._tokens[issued.token] = issued

        logger.info("User %s (role %s) logged in", user.username, user.role.value)
        return issued, user

    def authenticate(self, db: Session, bearer_token: str) -> User:
        """Return the active user owning `bearer_token`."""
        with self._lock:
            issued = self._tokens.get(bearer_token)
        if issued is None:
            raise AuthenticationError("Invalid bearer token")
        if issued.expires_at <= datetime.utcnow():
            self.revoke(bearer_token)
            raise AuthenticationError("Bearer token has expired")

        user = BookingRepository(db).find_user(issued.user_id)
        if user is None or not user.is_active:
            self.revoke(bearer_token)
            raise AuthenticationError("User authentication required")
        return user

    def revoke(self, bearer_token: str) -> None:
        with self._lock:
            self._tokens.pop(bearer_token, None)

    def _purge_expired(self, now: datetime) -> None:
        expired = [t for t, issued in self._tokens.items() if issued.expires_at <= now]
        for token in expired:
            del self._tokens[token]
