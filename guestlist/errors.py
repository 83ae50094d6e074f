"""Domain error taxonomy and its HTTP rendering.

Services raise these; the exception handlers registered in ``main`` turn
them into JSON responses. Anything else escaping a request is logged and
returned as an opaque 500.
"""

import logging
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GuestlistError(Exception):
    """Base application error with structured information."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def to_detail(self) -> dict:
        detail = {"error": self.error, "message": self.message}
        if self.field is not None:
            detail["field"] = self.field
        return detail


class Unauthenticated(GuestlistError):
    """Missing, unknown, revoked or expired session, or wrong session type.

    Always rendered with the same body so callers learn nothing about why.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthenticated"

    def __init__(self, reason: str = ""):
        super().__init__("Unauthorized")
        self.reason = reason


class InvalidCredentials(GuestlistError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid username or password")


class ValidationError(GuestlistError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"


class PartySizeExceeded(ValidationError):
    error = "party_size_exceeded"


class InvalidAttendeeName(ValidationError):
    error = "invalid_attendee_name"


class MissingPrimaryAttendee(ValidationError):
    error = "missing_primary_attendee"


class MissingMealPreference(ValidationError):
    error = "missing_meal_preference"


class InvalidMealPreference(ValidationError):
    error = "invalid_meal_preference"


class InvalidDietaryRestrictions(ValidationError):
    error = "invalid_dietary_restrictions"


class NotFound(GuestlistError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"


class Conflict(GuestlistError):
    status_code = status.HTTP_409_CONFLICT
    error = "conflict"


# --- FastAPI handlers ---

async def guestlist_error_handler(request: Request, exc: GuestlistError) -> JSONResponse:
    if isinstance(exc, Unauthenticated):
        logger.debug("Unauthenticated %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed payloads as a 400 naming the first failing field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc) or None
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ValidationError(message, field=field).to_detail()},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"error": "internal_error", "message": "Internal server error"}},
    )
