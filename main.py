import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from common.config.logging_config import setup_logging
from common.db.database import Base, engine
from hotel_service.app.backend.models import AdminAction, Amenity, Booking, Payment, Recommendation, Room, Service  # noqa: F401
from hotel_service.app.backend.routers import (
    admin_panel_router,
    amenities_router,
    booking_router,
    payments_router,
    recommendations_router,
    room_types_router,
    rooms_router,
    services_router,
)
from hotel_service.app.backend.services.exceptions import HotelServiceError
from user_service.app.backend.models import User  # noqa: F401
from user_service.app.backend.routers import users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema is ready")
    yield


app = FastAPI(title="Hotel Reservation Service", lifespan=lifespan)


@app.exception_handler(HotelServiceError)
async def hotel_service_error_handler(request: Request, exc: HotelServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.reason)
    content = {"success": False, "error": exc.error_type, "message": exc.reason, **exc.extra}
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


app.include_router(booking_router.router)
app.include_router(payments_router.router)
app.include_router(rooms_router.router)
app.include_router(room_types_router.router)
app.include_router(amenities_router.router)
app.include_router(services_router.router)
app.include_router(recommendations_router.router)
app.include_router(admin_panel_router.router)
app.include_router(users_router.router)


@app.get("/health")
def health():
    return {"status": "ok"}
