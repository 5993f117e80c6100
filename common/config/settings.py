import os


def _env_or(key: str, default: str) -> str:
    value = os.getenv(key)
    return value if value is not None else default


def _env_bool(key: str, default: bool = False) -> bool:
    return _env_or(key, str(default)).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = _env_or("DATABASE_URL", "sqlite:///./hotel.db")
DB_ECHO = _env_bool("DB_ECHO", False)

LOG_LEVEL = _env_or("LOG_LEVEL", "INFO")

REDIS_SESSION_URL = _env_or("REDIS_SESSION_URL", "redis://localhost:6379/0")
SESSION_ID_NAME = _env_or("SESSION_ID_NAME", "ssid")

# "local" - таблиця users у спільній БД, "http" - запит до User Service
GUEST_DIRECTORY_BACKEND = _env_or("GUEST_DIRECTORY_BACKEND", "local")
GUEST_DIRECTORY_TIMEOUT = float(_env_or("GUEST_DIRECTORY_TIMEOUT", "5.0"))

TRANSACTION_RETRIES = int(_env_or("TRANSACTION_RETRIES", "1"))
TRANSACTION_RETRY_BACKOFF = float(_env_or("TRANSACTION_RETRY_BACKOFF", "0.05"))
