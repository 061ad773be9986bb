"""Application wiring shared by the routers.

The service and the notification buffer are built lazily on first use so
importing the app never touches the data directory. Tests replace them via
app.dependency_overrides.
"""
import logging
from typing import Optional

from fastapi import Depends

from ecoeats.api.api_ai import get_ai_collaborator
from ecoeats.domain.User import User
from ecoeats.events.Event_Bus import GLOBAL_EVENT_BUS
from ecoeats.events.notifications import NotificationBuffer
from ecoeats.infra.clock import SystemClock
from ecoeats.infra.email_service import EmailService
from ecoeats.infra.image_store import FileImageStore
from ecoeats.infra.kv_store import JsonFileStore
from ecoeats.infra.paths import IMAGES_DIR, STORE_DIR
from ecoeats.infra.Snapshot_Repository import SnapshotRepository
from ecoeats.logic.service import EcoEatsService
from ecoeats.logic.store import EcoEatsStore

logger = logging.getLogger(__name__)

_service: Optional[EcoEatsService] = None
_notifications: Optional[NotificationBuffer] = None


def build_service() -> EcoEatsService:
    store = EcoEatsStore(SnapshotRepository(JsonFileStore(STORE_DIR)))
    service = EcoEatsService(
        store,
        clock=SystemClock(),
        bus=GLOBAL_EVENT_BUS,
        collaborators=get_ai_collaborator(),
        image_store=FileImageStore(IMAGES_DIR),
        email_service=EmailService(),
    )
    logger.info(f"EcoEats service ready ({len(store.users)} users loaded from {STORE_DIR})")
    return service


def get_service() -> EcoEatsService:
    global _service
    if _service is None:
        _service = build_service()
    return _service


def get_notifications() -> NotificationBuffer:
    global _notifications
    if _notifications is None:
        _notifications = NotificationBuffer().attach(GLOBAL_EVENT_BUS)
    return _notifications


def get_current_user(service: EcoEatsService = Depends(get_service)) -> User:
    """Raises NotAuthenticatedError (401) when nobody is logged in."""
    return service.require_user()
