"""DonationRecorder: turns a batch of pantry items into one immutable Donation."""
import logging
import uuid
from typing import List, Sequence

from ecoeats.domain.Donation import Donation
from ecoeats.domain.PantryItem import ItemStatus, PantryItem
from ecoeats.events.Event_Bus import EventBus
from ecoeats.infra.clock import SystemClock
from ecoeats.logic.expiry.classifier import eligible_for_use
from ecoeats.logic.rewards.points_ledger import PointsLedger
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.constants import POINTS_PER_DONATED_ITEM, REASON_DONATION
from ecoeats.utilities.errors import ValidationError

logger = logging.getLogger(__name__)


class DonationRecorder:
    def __init__(self, store: EcoEatsStore, points: PointsLedger, clock=None, bus: EventBus = None):
        self.store = store
        self.points = points
        self.clock = clock or SystemClock()
        self.bus = bus if bus is not None else points.bus

    def _validated_items(self, user_id: str, item_ids: Sequence[str]) -> List[PantryItem]:
        if not item_ids:
            raise ValidationError("Select at least one item to donate")
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("Duplicate items in donation")
        items = []
        for item_id in item_ids:
            item = self.store.find_item(user_id, item_id)
            if item is None:
                raise ValidationError(f"Item '{item_id}' is not in your pantry")
            if item.status != ItemStatus.ACTIVE:
                raise ValidationError(f"{item.product_name} is already {item.status.value}")
            items.append(item)
        return items

    def record_donation(self, user_id: str, item_ids: Sequence[str], ngo_name: str) -> Donation:
        '''
        Validates the whole batch first, then records the donation, marks every
        item Donated and awards 15 EcoPoints per item in one pass.
        '''
        self.store.get_user(user_id)
        ngo_name = (ngo_name or "").strip()
        if not ngo_name:
            raise ValidationError("NGO name cannot be empty")
        item_ids = list(item_ids or [])
        items = self._validated_items(user_id, item_ids)

        now = self.clock.now()
        points_earned = POINTS_PER_DONATED_ITEM * len(items)
        donation = Donation(
            id=str(uuid.uuid4()),
            user_id=user_id,
            item_ids=tuple(item_ids),
            ngo_name=ngo_name,
            date_donated=now.isoformat(),
            points_earned=points_earned,
        )

        self.store.donations(user_id).append(donation)
        for item in items:
            item.complete(ItemStatus.DONATED, now)
        self.store.persist_donations(user_id)
        self.store.persist_pantry(user_id)
        logger.info(f"{user_id} donated {len(items)} items to {ngo_name}")
        self.points.award(user_id, points_earned, REASON_DONATION)
        return donation

    def donatable_items(self, user_id: str) -> List[PantryItem]:
        return eligible_for_use(self.store.pantry(user_id), self.clock.today(), self.clock.tz)

    def history(self, user_id: str) -> List[Donation]:
        """Donations newest first."""
        return sorted(self.store.donations(user_id), key=lambda d: d.date_donated, reverse=True)
