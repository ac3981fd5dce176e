# roombooking/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roombooking.db.session import get_db
from roombooking.routers.dependencies import get_auth_service
from roombooking.schemas.auth import LoginPayload, LoginResponse
from roombooking.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginPayload,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange username/password for a bearer token."""
    issued, user = auth_service.login(db, payload.username, payload.password)
    return LoginResponse(
        token=issued.token,
        expires_at=issued.expires_at,
        user_id=user.id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
    )
