"""In-memory tables for users, pantries, donations and redemption history.

The store is the single owner of mutable state. Per-user tables are loaded
lazily from the snapshot repository and written back after each mutation.
Write failures are logged and never undo the in-memory change.
"""
import logging
from typing import Callable, Dict, List, Optional

from ecoeats.domain.Donation import Donation
from ecoeats.domain.PantryItem import PantryItem
from ecoeats.domain.Redemption import RedemptionEntry
from ecoeats.domain.User import User, find_user
from ecoeats.infra.Snapshot_Repository import SnapshotRepository
from ecoeats.utilities.errors import NotFoundError, PersistenceWriteFailure

logger = logging.getLogger(__name__)


class EcoEatsStore:
    def __init__(self, repository: SnapshotRepository):
        self.repository = repository
        self.users: Dict[str, User] = repository.load_users()
        stored_id = repository.load_current_user_id()
        self.current_user_id: Optional[str] = stored_id if stored_id in self.users else None
        self._pantry: Dict[str, List[PantryItem]] = {}
        self._donations: Dict[str, List[Donation]] = {}
        self._redemptions: Dict[str, List[RedemptionEntry]] = {}

    # --- Lookups -----------------------------------------------------------
    def current_user(self) -> Optional[User]:
        return find_user(self.users, self.current_user_id)

    def get_user(self, user_id: str) -> User:
        user = find_user(self.users, user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    def find_user_by_email(self, email: str) -> Optional[User]:
        wanted = (email or '').strip().lower()
        return next((u for u in self.users.values() if u.email.lower() == wanted), None)

    def pantry(self, user_id: str) -> List[PantryItem]:
        if user_id not in self._pantry:
            self._pantry[user_id] = self.repository.load_pantry(user_id)
        return self._pantry[user_id]

    def donations(self, user_id: str) -> List[Donation]:
        if user_id not in self._donations:
            self._donations[user_id] = self.repository.load_donations(user_id)
        return self._donations[user_id]

    def redemptions(self, user_id: str) -> List[RedemptionEntry]:
        if user_id not in self._redemptions:
            self._redemptions[user_id] = self.repository.load_redemptions(user_id)
        return self._redemptions[user_id]

    def find_item(self, user_id: str, item_id: str) -> Optional[PantryItem]:
        return next((i for i in self.pantry(user_id) if i.id == item_id), None)

    def get_item(self, user_id: str, item_id: str) -> PantryItem:
        item = self.find_item(user_id, item_id)
        if item is None:
            raise NotFoundError(f"Pantry item '{item_id}' not found")
        return item

    # --- Persistence (fire-and-forget) -------------------------------------
    def _write(self, label: str, write: Callable[[], None]) -> bool:
        try:
            write()
            return True
        except PersistenceWriteFailure as e:
            logger.error(f"Persisting {label} failed; in-memory state kept: {e}")
            return False

    def persist_users(self) -> bool:
        return self._write('users', lambda: self.repository.save_users(self.users))

    def persist_session(self) -> bool:
        return self._write('session', lambda: self.repository.save_current_user_id(self.current_user_id))

    def persist_pantry(self, user_id: str) -> bool:
        return self._write(f'pantry of {user_id}',
                           lambda: self.repository.save_pantry(user_id, self.pantry(user_id)))

    def persist_donations(self, user_id: str) -> bool:
        return self._write(f'donations of {user_id}',
                           lambda: self.repository.save_donations(user_id, self.donations(user_id)))

    def persist_redemptions(self, user_id: str) -> bool:
        return self._write(f'redemptions of {user_id}',
                           lambda: self.repository.save_redemptions(user_id, self.redemptions(user_id)))

    def persist_flag(self, label: str, write: Callable[[], None]) -> bool:
        return self._write(label, write)
