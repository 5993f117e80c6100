import logging
from typing import Optional, Protocol

import httpx
from sqlalchemy.orm import Session

from common.config.services_paths import USER_SERVICE_URL
from common.config.settings import GUEST_DIRECTORY_TIMEOUT
from user_service.app.backend.repositories import user_repository
from .exceptions import DirectoryUnavailableError

logger = logging.getLogger(__name__)


class GuestDirectory(Protocol):
    def guest_exists(self, guest_id: int) -> bool:
        ...


class LocalGuestDirectory:
    """Гості з таблиці users тієї ж бази даних."""

    def __init__(self, db: Session):
        self.db = db

    def guest_exists(self, guest_id: int) -> bool:
        return user_repository.get_user_by_id(self.db, guest_id) is not None


class UserServiceGuestDirectory:
    """Гості з User Service: GET {USER_SERVICE_URL}/users/{id}."""

    def __init__(
        self,
        base_url: str = USER_SERVICE_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = GUEST_DIRECTORY_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        # чужий клієнт не закриваємо
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def guest_exists(self, guest_id: int) -> bool:
        url = f"{self.base_url}/users/{guest_id}"
        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            logger.error("User Service is unreachable at %s: %s", url, exc)
            raise DirectoryUnavailableError("Guest directory is unavailable, please retry later") from exc

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        logger.error("User Service answered %s for %s", response.status_code, url)
        raise DirectoryUnavailableError(
            f"Guest directory answered with status {response.status_code}"
        )
