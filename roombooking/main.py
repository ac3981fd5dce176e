# roombooking/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from roombooking.config import get_settings
from roombooking.db.session import SessionLocal, engine
from roombooking.errors import BookingServiceError
from roombooking.models import Base
from roombooking.routers import auth as auth_router
from roombooking.routers import booking_requests as booking_router
from roombooking.routers import notifications as notifications_router
from roombooking.routers import rooms as rooms_router
from roombooking.routers import users as users_router
from roombooking.services.auth_service import AuthService
from roombooking.services.user_service import ensure_admin
from roombooking.utils.logger import configure_logging, get_logger

settings = get_settings()
configure_logging()
logger = get_logger(__name__)


def _seed_admin() -> None:
    if not (settings.SEED_ADMIN_USERNAME and settings.SEED_ADMIN_PASSWORD):
        return
    db = SessionLocal()
    try:
        admin = ensure_admin(db, settings.SEED_ADMIN_USERNAME, settings.SEED_ADMIN_PASSWORD)
        logger.info("Seed admin available as %s", admin.username)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    _seed_admin()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.auth_service = AuthService(settings=settings)


@app.exception_handler(BookingServiceError)
async def booking_error_handler(request: Request, exc: BookingServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Routers
app.include_router(auth_router.router)
app.include_router(booking_router.router)
app.include_router(rooms_router.router)
app.include_router(users_router.router)
app.include_router(notifications_router.router)


@app.get("/health")
def health_check():
    db_status = "ok"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        db_status = "error"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "app": settings.APP_NAME,
        "env": settings.ENV,
        "database": db_status,
    }
