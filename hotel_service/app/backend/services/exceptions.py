from typing import Any, Dict, Optional


class HotelServiceError(Exception):
    """Base class for every rejected booking/payment/registry operation."""

    error_type = "error"
    status_code = 400

    def __init__(self, reason: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(reason)
        self.reason = reason
        self.extra = extra or {}


class ValidationError(HotelServiceError):
    error_type = "validation_error"
    status_code = 400


class ConflictError(HotelServiceError):
    error_type = "conflict"
    status_code = 409


class NotFoundError(HotelServiceError):
    error_type = "not_found"
    status_code = 404


class AuthorizationError(HotelServiceError):
    error_type = "forbidden"
    status_code = 403


class StateError(HotelServiceError):
    error_type = "invalid_state"
    status_code = 409


class TransactionConflictError(HotelServiceError):
    """Deadlock / lock timeout on the per-room or per-booking serialization point."""

    error_type = "transaction_conflict"
    status_code = 503


class DirectoryUnavailableError(HotelServiceError):
    error_type = "directory_unavailable"
    status_code = 503
