from fastapi import FastAPI, Query, Request, Depends
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from ecoeats.api.dependencies import get_notifications
from ecoeats.events.notifications import NotificationBuffer
from ecoeats.utilities.errors import (
    CollaboratorUnavailable,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)

# Routers
from ecoeats.api.routes import auth, pantry, donations, rewards, recipes
from ecoeats.api.api_ai import router as ai_router

# Logging
logger = logging.getLogger("ecoeats_app")

# Initialize FastAPI app
app = FastAPI(title="EcoEats API")

# Include routers
app.include_router(auth.router)
app.include_router(pantry.router)
app.include_router(donations.router)
app.include_router(rewards.router)
app.include_router(recipes.router)
app.include_router(ai_router)


@app.on_event("startup")
def _startup_notifications():
    """Subscribe the notification buffer to the event bus when the app starts."""
    get_notifications()
    logger.info("Notification buffer attached to the event bus")


# -------------------- Error mapping --------------------
@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(NotAuthenticatedError)
async def _not_authenticated(request: Request, exc: NotAuthenticatedError):
    return JSONResponse(status_code=401, content={"error": str(exc)})


@app.exception_handler(CollaboratorUnavailable)
async def _collaborator_unavailable(request: Request, exc: CollaboratorUnavailable):
    logger.warning(f"Collaborator unavailable on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"error": str(exc)})


# -------------------- Notifications --------------------
@app.get("/api/notifications")
def get_notification_events(
    since: Optional[int] = Query(default=None, description="Return notifications with id greater than this value"),
    buffer: NotificationBuffer = Depends(get_notifications),
):
    """Toast notifications (points earned, warnings) for the client to poll."""
    return buffer.get_events(since)


@app.get("/api/health")
def health():
    return {"status": "ok"}
