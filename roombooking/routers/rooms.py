# roombooking/routers/rooms.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from roombooking.db.session import get_db
from roombooking.models.user import User
from roombooking.routers.dependencies import get_current_user, require_admin
from roombooking.schemas.room import BookingInfo, RoomIn, RoomOut, RoomScheduleOut
from roombooking.services import room_service

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=List[RoomOut])
def list_rooms(
    search: Optional[str] = None,
    min_capacity: Optional[int] = Query(None, ge=1),
    location: Optional[str] = None,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return room_service.list_rooms(
        db,
        search=search,
        min_capacity=min_capacity,
        location=location,
    )


@router.get("/schedule", response_model=List[RoomScheduleOut])
def get_room_schedules(
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Every room with today's confirmed bookings, earliest first."""
    return [
        RoomScheduleOut(
            id=s.room.id,
            name=s.room.name,
            location=s.room.location,
            capacity=s.room.capacity,
            bookings=[BookingInfo.model_validate(b) for b in s.bookings],
        )
        for s in room_service.get_room_schedules(db)
    ]


@router.get("/{room_id}", response_model=RoomOut)
def get_room(
    room_id: int,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return room_service.get_room(db, room_id)


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomIn,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return room_service.create_room(db, **payload.model_dump())


@router.put("/{room_id}", response_model=RoomOut)
def update_room(
    room_id: int,
    payload: RoomIn,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return room_service.update_room(db, room_id, **payload.model_dump())


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_room(
    room_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    room_service.delete_room(db, room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
