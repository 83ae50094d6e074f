"""Guestlist Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from guestlist.config import configure_logging, settings
from guestlist.database import init_db
from guestlist.errors import (
    GuestlistError,
    guestlist_error_handler,
    request_validation_handler,
    unhandled_error_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create tables on startup."""
    configure_logging()
    init_db()
    logger.info("%s started (db=%s)", settings.app_name, settings.db_path)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Invite-code gated guest list and RSVP service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(GuestlistError, guestlist_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# --- Register API routers ---
from guestlist.api.auth import router as auth_router  # noqa: E402
from guestlist.api.events import router as events_router  # noqa: E402
from guestlist.api.rsvp import router as rsvp_router  # noqa: E402
from guestlist.api.admin import router as admin_router  # noqa: E402

app.include_router(auth_router)
app.include_router(events_router)
app.include_router(rsvp_router)
app.include_router(admin_router)


@app.get("/health")
def health():
    return {"status": "ok"}
