"""Snapshot repository: reads and writes whole-entity snapshots in a key-value store."""
import logging
from typing import Dict, List, Optional

from ecoeats.domain.Donation import Donation
from ecoeats.domain.PantryItem import PantryItem
from ecoeats.domain.Redemption import RedemptionEntry
from ecoeats.domain.User import User

logger = logging.getLogger(__name__)

USERS_KEY = 'users'
CURRENT_USER_KEY = 'current_user_id'
LAST_EXPIRY_EMAIL_KEY = 'last_expiry_email_date'


def pantry_key(user_id: str) -> str:
    return f'pantry_{user_id}'


def donations_key(user_id: str) -> str:
    return f'donations_{user_id}'


def redemptions_key(user_id: str) -> str:
    return f'redemptions_{user_id}'


def images_generated_key(user_id: str) -> str:
    return f'images_generated_{user_id}'


def _load_list(store, key: str, factory) -> list:
    raw = store.get(key, [])
    if not isinstance(raw, list):
        logger.warning(f"Snapshot '{key}' is not a list; ignoring it")
        return []
    result = []
    for entry in raw:
        try:
            result.append(factory(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed entry in '{key}': {e}")
    return result


class SnapshotRepository:
    """Read side never raises; write side raises PersistenceWriteFailure for the caller to log."""

    def __init__(self, store):
        self.store = store

    # --- Users & session -------------------------------------------------
    def load_users(self) -> Dict[str, User]:
        return {u.id: u for u in _load_list(self.store, USERS_KEY, User.from_dict) if u.id}

    def save_users(self, users: Dict[str, User]) -> None:
        self.store.set(USERS_KEY, [u.to_dict() for u in users.values()])

    def load_current_user_id(self) -> Optional[str]:
        value = self.store.get(CURRENT_USER_KEY, None)
        return value if isinstance(value, str) else None

    def save_current_user_id(self, user_id: Optional[str]) -> None:
        self.store.set(CURRENT_USER_KEY, user_id)

    # --- Per-user tables ---------------------------------------------------
    def load_pantry(self, user_id: str) -> List[PantryItem]:
        return _load_list(self.store, pantry_key(user_id), PantryItem.from_dict)

    def save_pantry(self, user_id: str, items: List[PantryItem]) -> None:
        self.store.set(pantry_key(user_id), [i.to_dict() for i in items])

    def load_donations(self, user_id: str) -> List[Donation]:
        return _load_list(self.store, donations_key(user_id), Donation.from_dict)

    def save_donations(self, user_id: str, donations: List[Donation]) -> None:
        self.store.set(donations_key(user_id), [d.to_dict() for d in donations])

    def load_redemptions(self, user_id: str) -> List[RedemptionEntry]:
        return _load_list(self.store, redemptions_key(user_id), RedemptionEntry.from_dict)

    def save_redemptions(self, user_id: str, entries: List[RedemptionEntry]) -> None:
        self.store.set(redemptions_key(user_id), [e.to_dict() for e in entries])

    # --- Flags -------------------------------------------------------------
    def images_generated(self, user_id: str) -> bool:
        return bool(self.store.get(images_generated_key(user_id), False))

    def mark_images_generated(self, user_id: str) -> None:
        self.store.set(images_generated_key(user_id), True)

    def last_expiry_email_date(self) -> Optional[str]:
        return self.store.get(LAST_EXPIRY_EMAIL_KEY, None)

    def save_last_expiry_email_date(self, day: str) -> None:
        self.store.set(LAST_EXPIRY_EMAIL_KEY, day)
