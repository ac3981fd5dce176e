# roombooking/routers/booking_requests.py
from datetime import date, time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from roombooking.errors import BookingRequestNotFound
from roombooking.models.booking_request import BookingStatus
from roombooking.models.user import User
from roombooking.routers.dependencies import (
    get_booking_service,
    get_current_user,
    require_admin,
)
from roombooking.schemas.booking import (
    ActionResult,
    AvailabilityOut,
    BookingRequestCreate,
    BookingRequestOut,
    BookingRequestPage,
    RejectPayload,
)
from roombooking.services.booking_service import BookingRequestService
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/booking-requests", tags=["booking-requests"])


@router.post("", response_model=BookingRequestOut, status_code=status.HTTP_201_CREATED)
def create_booking_request(
    payload: BookingRequestCreate,
    user: User = Depends(get_current_user),
    service: BookingRequestService = Depends(get_booking_service),
):
    """
    Submit a booking request for the caller.

    The employee id and name come from the authenticated user, never from
    the payload.
    """
    logger.info(
        "User %s (%s) creating booking request for room %s",
        user.id,
        user.full_name,
        payload.room_id,
    )
    return service.create(
        employee_id=user.id,
        employee_name=user.full_name,
        room_id=payload.room_id,
        on_date=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        purpose=payload.purpose,
    )


@router.get("/pending", response_model=List[BookingRequestOut])
def list_pending_requests(
    _: User = Depends(require_admin),
    service: BookingRequestService = Depends(get_booking_service),
):
    return service.list_pending()


@router.get("/my-requests", response_model=List[BookingRequestOut])
def list_my_requests(
    user: User = Depends(get_current_user),
    service: BookingRequestService = Depends(get_booking_service),
):
    return service.list_for_employee(user.id)


@router.get("/check-availability", response_model=AvailabilityOut)
def check_availability(
    room_id: int = Query(..., gt=0),
    on_date: date = Query(..., alias="date"),
    start_time: time = Query(...),
    end_time: time = Query(...),
    _: User = Depends(get_current_user),
    service: BookingRequestService = Depends(get_booking_service),
):
    """Advisory only; create and confirm re-check authoritatively."""
    available = service.check_availability(room_id, on_date, start_time, end_time)
    return AvailabilityOut(available=available)


@router.get("", response_model=BookingRequestPage)
def list_booking_requests(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    _: User = Depends(require_admin),
    service: BookingRequestService = Depends(get_booking_service),
):
    result = service.list_all(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )
    return BookingRequestPage(
        data=[BookingRequestOut.model_validate(b) for b in result.items],
        total_count=result.total_count,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{request_id}", response_model=BookingRequestOut)
def get_booking_request(
    request_id: int,
    user: User = Depends(get_current_user),
    service: BookingRequestService = Depends(get_booking_service),
):
    booking = service.get(request_id)
    if not user.is_admin and booking.employee_id != user.id:
        # Other employees' requests are reported as missing
        raise BookingRequestNotFound(request_id)
    return booking


@router.post("/{request_id}/confirm", response_model=ActionResult)
def confirm_booking_request(
    request_id: int,
    admin: User = Depends(require_admin),
    service: BookingRequestService = Depends(get_booking_service),
):
    logger.info("Admin %s confirming booking request %s", admin.username, request_id)
    success = service.confirm(request_id)
    return ActionResult(message="Booking request confirmed successfully", success=success)


@router.post("/{request_id}/reject", response_model=ActionResult)
def reject_booking_request(
    request_id: int,
    payload: Optional[RejectPayload] = None,
    admin: User = Depends(require_admin),
    service: BookingRequestService = Depends(get_booking_service),
):
    reason = payload.reject_reason if payload else None
    logger.info(
        "Admin %s rejecting booking request %s with reason: %s",
        admin.username,
        request_id,
        reason or "No reason provided",
    )
    success = service.reject(request_id, reason)
    return ActionResult(message="Booking request rejected successfully", success=success)
