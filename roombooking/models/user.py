from datetime import datetime
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, String

from roombooking.models.base import Base


class UserRole(str, enum.Enum):
    EMPLOYEE = "Employee"
    ADMIN = "Admin"


class User(Base):
    __tablename__ = "users"

    # "emp-<hex>" / "admin-<hex>"
    id = Column(String(64), primary_key=True)

    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)

    # SMS target for notifications, optional
    phone = Column(String(50), nullable=True)
    profile_image_url = Column(String(500), nullable=True)

    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        if self.middle_name:
            return f"{self.first_name} {self.middle_name} {self.last_name}"
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
