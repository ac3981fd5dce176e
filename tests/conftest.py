# tests/conftest.py
import os

# Must be set before roombooking.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_roombooking.db")
os.environ.setdefault("ENV", "test")
for _var in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_FROM_NUMBER"):
    os.environ.pop(_var, None)

import pytest  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from roombooking.db.session import SessionLocal, engine  # noqa: E402
from roombooking.models import Base, Room, User, UserRole  # noqa: E402
from roombooking.services.notification_service import NotificationDispatcher  # noqa: E402
from roombooking.services.notifier import Notifier  # noqa: E402
from roombooking.services.passwords import hash_password  # noqa: E402

PASSWORD = "Secret@123"
# Hashed once for the whole run
PASSWORD_HASH = hash_password(PASSWORD)


class RecordingNotifier(Notifier):
    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    def send(self, recipient, event) -> None:
        if self.fail:
            raise RuntimeError("delivery channel down")
        self.sent.append((recipient.id, event))


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier=notifier)


@pytest.fixture
def failing_dispatcher():
    return NotificationDispatcher(notifier=RecordingNotifier(fail=True))


@pytest.fixture
def make_user(db):
    def _make(username: str, role: UserRole = UserRole.EMPLOYEE, **fields) -> User:
        prefix = "admin" if role == UserRole.ADMIN else "emp"
        user = User(
            id=f"{prefix}-{username}",
            username=username,
            email=f"{username}@example.com",
            password_hash=PASSWORD_HASH,
            first_name=fields.pop("first_name", username.capitalize()),
            last_name=fields.pop("last_name", "Tester"),
            role=role,
            is_active=fields.pop("is_active", True),
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_room(db):
    def _make(name: str, capacity: int = 8, location: str = "Floor 1", **fields) -> Room:
        room = Room(name=name, location=location, capacity=capacity, **fields)
        db.add(room)
        db.commit()
        db.refresh(room)
        return room

    return _make


@pytest.fixture
def auth_headers():
    def _headers(client, username: str, password: str = PASSWORD) -> dict:
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _headers
