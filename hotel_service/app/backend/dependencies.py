from typing import Iterator

from fastapi import Depends, HTTPException, Request, status
from fastapi_redis_session import getSession
from sqlalchemy.orm import Session

from common.config.redis_session_config import session_storage
from common.config.settings import GUEST_DIRECTORY_BACKEND
from common.db.database import get_db
from .services.actor import Actor
from .services.exceptions import AuthorizationError
from .services.guest_directory import GuestDirectory, LocalGuestDirectory, UserServiceGuestDirectory


def get_current_actor(request: Request) -> Actor:
    # сесію видає сервіс авторизації, тут її лише читаємо
    session = getSession(request, sessionStorage=session_storage)
    if not session or not session.get("user_id"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return Actor(user_id=int(session["user_id"]), role=session.get("user_role") or "user")


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise AuthorizationError("Administrator rights are required")
    return actor


def get_guest_directory(db: Session = Depends(get_db)) -> Iterator[GuestDirectory]:
    if GUEST_DIRECTORY_BACKEND == "http":
        # клієнт живе рівно один запит
        with UserServiceGuestDirectory() as directory:
            yield directory
    else:
        yield LocalGuestDirectory(db)
