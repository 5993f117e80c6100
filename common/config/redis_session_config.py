from fastapi_redis_session import SessionStorage
from fastapi_redis_session.config import basicConfig

from common.config.settings import REDIS_SESSION_URL, SESSION_ID_NAME

# Сесії видає сервіс авторизації, тут ми їх лише читаємо.
# Redis.from_url не відкриває з'єднання до першого запиту.
basicConfig(redisURL=REDIS_SESSION_URL, sessionIdName=SESSION_ID_NAME)

session_storage = SessionStorage()
