"""PantryLedger: adds, completes and removes pantry items.

Collaborator lookups (nutrition, product image) are awaited outside of any
mutation. Each one is bounded by a timeout and degrades to a placeholder plus
a warning, so adding an item never fails because an AI call did.
"""
from __future__ import annotations
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote_plus

from pydantic import ValidationError as PydanticValidationError

from ecoeats.domain.PantryItem import ItemStatus, PantryItem
from ecoeats.events.Event_Bus import EventBus, PANTRY_IMAGE_RESOLVED
from ecoeats.events.event_helpers import notify, publish_image_resolved
from ecoeats.infra.clock import SystemClock
from ecoeats.logic.expiry.classifier import parse_expiry, partition
from ecoeats.logic.rewards.points_ledger import PointsLedger
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.config import COLLABORATOR_TIMEOUT_SECONDS
from ecoeats.utilities.constants import (
    LOCAL_IMAGE_PREFIX, PLACEHOLDER_IMAGE_URL, POINTS_ITEM_USED, REASON_ITEM_USED
)
from ecoeats.utilities.errors import CollaboratorUnavailable, NotFoundError, ValidationError
from ecoeats.utilities.validators import PantryItemInput

logger = logging.getLogger(__name__)

__all__ = ["PantryLedger", "AddItemResult", "placeholder_image_url"]


def placeholder_image_url(product_name: str) -> str:
    return PLACEHOLDER_IMAGE_URL.format(name=quote_plus(product_name or "Food"))


@dataclass
class AddItemResult:
    item: PantryItem
    warnings: List[str] = field(default_factory=list)


def _validate_item_input(data: Dict[str, Any]) -> PantryItemInput:
    try:
        parsed = PantryItemInput(**data)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        raise ValidationError(f"Invalid pantry item: {first.get('msg', str(e))}") from e
    if parse_expiry(parsed.expiry_date) is None:
        raise ValidationError(f"Invalid expiry date: {parsed.expiry_date!r}")
    return parsed


class PantryLedger:
    def __init__(self, store: EcoEatsStore, points: PointsLedger, clock=None, bus: EventBus = None,
                 collaborators=None, image_store=None, timeout: float = COLLABORATOR_TIMEOUT_SECONDS):
        self.store = store
        self.points = points
        self.clock = clock or SystemClock()
        self.bus = bus if bus is not None else points.bus
        self.collaborators = collaborators
        self.image_store = image_store
        self.timeout = timeout
        self.bus.subscribe(PANTRY_IMAGE_RESOLVED, self._apply_resolved_image)

    # --- Collaborator calls --------------------------------------------------
    async def _bounded(self, label: str, coro):
        '''Awaits a collaborator call; any failure or timeout becomes CollaboratorUnavailable.'''
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise CollaboratorUnavailable(f"{label} timed out after {self.timeout}s") from e
        except CollaboratorUnavailable:
            raise
        except Exception as e:
            raise CollaboratorUnavailable(f"{label} failed: {e}") from e

    async def _lookup_nutrition(self, product_name: str) -> Optional[Dict[str, str]]:
        if self.collaborators is None:
            return None
        return await self._bounded("Nutrition lookup", self.collaborators.lookup_nutrition(product_name))

    async def _resolve_image(self, product_name: str, quantity: float = 0, unit: str = "") -> Optional[str]:
        if self.collaborators is None:
            return None
        return await self._bounded(
            "Image generation",
            self.collaborators.generate_product_image(product_name, quantity, unit),
        )

    def _store_image(self, item_id: str, image_url: str) -> str:
        '''Moves data: URLs into the local image store and returns the reference to keep on the item.'''
        if not image_url.startswith("data:"):
            return image_url
        if self.image_store is None:
            raise ValueError("No local image store configured")
        self.image_store.store(item_id, image_url)
        return f"{LOCAL_IMAGE_PREFIX}{item_id}"

    # --- Operations ----------------------------------------------------------
    async def add_item(self, user_id: str, data: Dict[str, Any]) -> AddItemResult:
        parsed = _validate_item_input(data)
        self.store.get_user(user_id)
        item_id = str(uuid.uuid4())
        warnings: List[str] = []

        want_image = not parsed.image_url
        lookups = [self._lookup_nutrition(parsed.product_name)]
        if want_image:
            lookups.append(self._resolve_image(parsed.product_name, parsed.quantity, parsed.quantity_unit))
        results = await asyncio.gather(*lookups, return_exceptions=True)

        nutrition = results[0]
        if isinstance(nutrition, BaseException) or not nutrition:
            if isinstance(nutrition, BaseException):
                logger.warning(f"Nutrition for '{parsed.product_name}' unavailable: {nutrition}")
            warnings.append(f"Could not fetch nutrition info for {parsed.product_name}.")
            nutrition = None

        image_url = parsed.image_url
        if want_image:
            image_url = results[1]
            if isinstance(image_url, BaseException) or not image_url:
                if isinstance(image_url, BaseException):
                    logger.warning(f"Image for '{parsed.product_name}' unavailable: {image_url}")
                warnings.append(f"Could not generate an image for {parsed.product_name}; using a placeholder.")
                image_url = placeholder_image_url(parsed.product_name)

        # The user may have gone away while the lookups were in flight
        if user_id not in self.store.users:
            logger.warning(f"User {user_id} disappeared before '{parsed.product_name}' was saved; item discarded")
            raise NotFoundError(f"User '{user_id}' not found")

        try:
            image_url = self._store_image(item_id, image_url)
        except (ValueError, OSError) as e:
            logger.warning(f"Could not store image for '{parsed.product_name}': {e}")
            warnings.append(f"Could not save the image for {parsed.product_name}; using a placeholder.")
            image_url = placeholder_image_url(parsed.product_name)

        item = PantryItem(
            id=item_id,
            product_name=parsed.product_name,
            category=parsed.category or "Other",
            expiry_date=parsed.expiry_date,
            quantity=parsed.quantity,
            quantity_unit=parsed.quantity_unit,
            image_url=image_url,
            status=ItemStatus.ACTIVE,
            added_date=self.clock.now().isoformat(),
            nutrition=nutrition,
        )
        self.store.pantry(user_id).append(item)
        self.store.persist_pantry(user_id)
        logger.info(f"Added '{item.product_name}' ({item.id}) to pantry of {user_id}")

        for warning in warnings:
            notify(self.bus, warning, 'warning')
        notify(self.bus, f"{item.product_name} added to your pantry!", 'success')
        return AddItemResult(item, warnings)

    def update_status(self, user_id: str, item_id: str, status) -> PantryItem:
        '''
        Moves an Active item to Used or Donated. Marking Used awards EcoPoints once;
        a second call on a completed item is a no-op.
        '''
        try:
            status = ItemStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown item status: {status!r}")
        if status == ItemStatus.ACTIVE:
            raise ValidationError("Items cannot be moved back to Active")

        item = self.store.get_item(user_id, item_id)
        if not item.complete(status, self.clock.now()):
            logger.info(f"Item {item.id} is already {item.status.value}; ignoring change to {status.value}")
            return item

        self.store.persist_pantry(user_id)
        logger.info(f"Item {item.id} of {user_id} marked {status.value}")
        if status == ItemStatus.USED:
            self.points.award(user_id, POINTS_ITEM_USED, REASON_ITEM_USED)
        return item

    def _release_images(self, items: Iterable[PantryItem]):
        local_ids = [i.id for i in items if i.has_local_image]
        if not local_ids or self.image_store is None:
            return
        try:
            self.image_store.delete_many(local_ids)
        except OSError as e:
            logger.warning(f"Could not release stored images {local_ids}: {e}")

    def delete_item(self, user_id: str, item_id: str) -> PantryItem:
        item = self.store.get_item(user_id, item_id)
        self.store.pantry(user_id).remove(item)
        self.store.persist_pantry(user_id)
        self._release_images([item])
        logger.info(f"Deleted item {item.id} from pantry of {user_id}")
        notify(self.bus, f"{item.product_name} removed from your pantry.", 'success')
        return item

    def delete_multiple(self, user_id: str, item_ids: Iterable[str]) -> int:
        '''Removes every listed item that exists; unknown ids are skipped. Returns the number removed.'''
        wanted = set(item_ids)
        pantry = self.store.pantry(user_id)
        removed = [i for i in pantry if i.id in wanted]
        if not removed:
            return 0
        pantry[:] = [i for i in pantry if i.id not in wanted]
        self.store.persist_pantry(user_id)
        self._release_images(removed)
        logger.info(f"Deleted {len(removed)} items from pantry of {user_id}")
        notify(self.bus, f"{len(removed)} items removed from your pantry.", 'success')
        return len(removed)

    # --- Background image backfill --------------------------------------------
    def _apply_resolved_image(self, event_name: str, payload: Any):
        '''
        Receives pantry.image_resolved. The item must still exist, belong to the
        user and still show a placeholder; otherwise the result is stale and dropped.
        '''
        if not isinstance(payload, dict):
            return
        user_id = payload.get('user_id')
        item_id = payload.get('item_id')
        image_url = payload.get('image_url')
        if not image_url or user_id not in self.store.users:
            logger.warning(f"Discarding image result for {item_id}: user {user_id} is gone")
            return
        item = self.store.find_item(user_id, item_id)
        if item is None or not item.needs_image:
            logger.warning(f"Discarding stale image result for {item_id}")
            return
        try:
            item.image_url = self._store_image(item.id, image_url)
        except (ValueError, OSError) as e:
            logger.warning(f"Could not store generated image for {item.id}: {e}")
            return
        self.store.persist_pantry(user_id)
        logger.debug(f"Image applied to {item.id}")

    async def backfill_images(self, user_id: str) -> int:
        '''
        One-time job per user: generates images for items still showing a
        placeholder. Returns the number of items that received an image. An empty
        pantry leaves the job pending.
        '''
        repository = self.store.repository
        if repository.images_generated(user_id):
            return 0
        self.store.get_user(user_id)
        items = self.store.pantry(user_id)
        if not items:
            return 0
        targets = [i for i in items if i.needs_image]
        updated = 0
        for item in targets:
            try:
                image_url = await self._resolve_image(item.product_name, item.quantity, item.quantity_unit.value)
            except CollaboratorUnavailable as e:
                logger.warning(f"Backfill image for '{item.product_name}' failed: {e}")
                continue
            if not image_url:
                continue
            publish_image_resolved(self.bus, user_id, item.id, image_url)
            current = self.store.find_item(user_id, item.id)
            if current is not None and not current.needs_image:
                updated += 1
        self.store.persist_flag(f'images flag of {user_id}', lambda: repository.mark_images_generated(user_id))
        logger.info(f"Image backfill for {user_id}: {updated}/{len(targets)} items updated")
        return updated

    # --- Views ---------------------------------------------------------------
    def view(self, user_id: str) -> Dict[str, List[PantryItem]]:
        '''Active items grouped by expiry band, plus completed items newest first.'''
        items = self.store.pantry(user_id)
        groups = partition(items, self.clock.today(), self.clock.tz)
        completed = [i for i in items if not i.is_active]
        completed.sort(key=lambda i: i.date_completed or "", reverse=True)
        groups['completed'] = completed
        return groups
