# scripts/seed_demo.py
"""
Seed a local database with demo data.

Creates one admin, one employee and a handful of rooms so the API can be
exercised right after `uvicorn roombooking.main:app`. Existing users and
rooms (matched by username / room name) are left untouched, so the script
can be run repeatedly.
"""

import argparse

from roombooking.db.repository import BookingRepository
from roombooking.db.session import SessionLocal, engine
from roombooking.models import Base, UserRole
from roombooking.services.room_service import create_room
from roombooking.services.user_service import create_user, ensure_admin

DEMO_ROOMS = [
    ("Aurora", "Floor 1", 4, ["Whiteboard"]),
    ("Borealis", "Floor 2", 8, ["Projector", "Video Conference"]),
    ("Cascade", "Floor 3", 20, ["Projector", "Sound System", "Whiteboard"]),
]


def run_once(admin_password: str, employee_password: str) -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        repo = BookingRepository(db)

        admin = ensure_admin(db, "admin", admin_password)
        print(f"[seed_demo] Admin ready: {admin.username} ({admin.id})")

        employee = repo.find_user_by_username("jdoe")
        if employee is None:
            employee = create_user(
                db,
                username="jdoe",
                email="jdoe@example.com",
                password=employee_password,
                first_name="Jane",
                last_name="Doe",
                role=UserRole.EMPLOYEE,
            )
        print(f"[seed_demo] Employee ready: {employee.username} ({employee.id})")

        for name, location, capacity, amenities in DEMO_ROOMS:
            if repo.find_room_by_name(name) is not None:
                continue
            room = create_room(
                db,
                name=name,
                location=location,
                capacity=capacity,
                amenities=amenities,
            )
            print(f"[seed_demo] Room created: {room.name} (id={room.id})")

    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--admin-password",
        default="Admin@12345",
        help="Password for the 'admin' account",
    )
    parser.add_argument(
        "--employee-password",
        default="Employee@123",
        help="Password for the 'jdoe' account",
    )
    args = parser.parse_args()
    run_once(admin_password=args.admin_password, employee_password=args.employee_password)


if __name__ == "__main__":
    main()
