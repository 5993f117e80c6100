import os

HOTEL_SERVICE_URL = os.getenv("HOTEL_SERVICE_URL", "http://localhost:8000")
USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://localhost:8001")
