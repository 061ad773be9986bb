"""Shared builders and stub collaborators for the test suite."""
import asyncio
import base64
from datetime import datetime, timedelta, timezone

from ecoeats.domain.PantryItem import PantryItem
from ecoeats.events.Event_Bus import EventBus
from ecoeats.infra.clock import FixedClock
from ecoeats.infra.image_store import MemoryImageStore
from ecoeats.infra.kv_store import MemoryStore
from ecoeats.infra.Snapshot_Repository import SnapshotRepository
from ecoeats.logic.service import EcoEatsService
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.errors import CollaboratorUnavailable

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake image bytes").decode()


def expiry_in(days: int) -> str:
    """ISO timestamp (UTC, trailing Z) for midnight `days` after NOW's day."""
    day = (NOW + timedelta(days=days)).date()
    return f"{day.isoformat()}T00:00:00.000Z"


class StubCollaborators:
    """Configurable stand-in for the AI collaborator."""

    def __init__(self, nutrition=None, image=PNG_DATA_URL, recipes=None, fail=False, delay=0.0, on_call=None):
        self.nutrition = nutrition if nutrition is not None else {'calories': '52 kcal'}
        self.image = image
        self.recipes = recipes or []
        self.fail = fail
        self.delay = delay
        self.on_call = on_call
        self.calls = []

    async def _answer(self, name, value):
        self.calls.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.on_call is not None:
            self.on_call(name)
        if self.fail:
            raise CollaboratorUnavailable(f"{name} is down")
        return value

    async def lookup_nutrition(self, product_name):
        return await self._answer('nutrition', self.nutrition)

    async def generate_product_image(self, product_name, quantity=0, unit=''):
        return await self._answer('image', self.image)

    async def generate_recipes(self, ingredient_names):
        return await self._answer('recipes', self.recipes)


class RecordingEmailService:
    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    def send_welcome_email(self, name, email):
        self.sent.append(('welcome', email))
        return self.succeed

    def send_expiry_notification_email(self, name, email, expired, expiring_soon):
        self.sent.append(('expiry', email, list(expired), list(expiring_soon)))
        return self.succeed


def collect(bus: EventBus, event_name: str) -> list:
    """Subscribe a recorder to `event_name` and return the list it appends payloads to."""
    received = []
    bus.subscribe(event_name, lambda _name, payload: received.append(payload))
    return received


def make_service(collaborators=None, kv=None, email_service=None, timeout=1.0):
    kv = kv if kv is not None else MemoryStore()
    bus = EventBus()
    service = EcoEatsService(
        EcoEatsStore(SnapshotRepository(kv)),
        clock=FixedClock(NOW),
        bus=bus,
        collaborators=collaborators,
        image_store=MemoryImageStore(),
        email_service=email_service if email_service is not None else RecordingEmailService(),
        timeout=timeout,
    )
    return service


def make_user(service, name="Asha", email="asha@example.com", points=0, user_type="Consumer"):
    user = service.sign_up(name, email, "secret123", user_type)
    user.eco_points = points
    return user


def add_active_item(service, user_id, name, days=5, item_id=None):
    """Inserts an Active item directly, bypassing the async add flow."""
    item = PantryItem(
        id=item_id or f"item-{name.lower().replace(' ', '-')}-{len(service.store.pantry(user_id))}",
        product_name=name,
        category="Other",
        expiry_date=expiry_in(days),
        quantity=1,
        image_url="https://placehold.co/400x300/161B22/E5E7EB?text=" + name,
        added_date=NOW.isoformat(),
    )
    service.store.pantry(user_id).append(item)
    return item
