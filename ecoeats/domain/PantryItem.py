"""PantryItem domain entity: a tracked food item with a one-way status lifecycle."""
from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from ecoeats.utilities.constants import LOCAL_IMAGE_PREFIX, PLACEHOLDER_IMAGE_HOSTS


class ItemStatus(str, Enum):
    ACTIVE = "Active"
    USED = "Used"
    DONATED = "Donated"


TERMINAL_STATUSES = (ItemStatus.USED, ItemStatus.DONATED)


class QuantityUnit(str, Enum):
    KG = "kg"
    G = "g"
    L = "L"
    ML = "ml"
    PCS = "pcs"


class PantryItem:
    def __init__(self, id: str, product_name: str = "", category: str = "", expiry_date: str = "",
                 quantity: float = 0, quantity_unit: QuantityUnit = QuantityUnit.PCS,
                 image_url: str = "", status: ItemStatus = ItemStatus.ACTIVE, added_date: str = "",
                 date_completed: Optional[str] = None, nutrition: Optional[Dict[str, str]] = None):
        self.id = id
        self.product_name = product_name
        self.category = category
        # Kept verbatim; DateClassifier tolerates unparseable values
        self.expiry_date = expiry_date
        self.quantity = quantity
        self.quantity_unit = QuantityUnit(quantity_unit)
        self.image_url = image_url or ""
        self.status = ItemStatus(status)
        self.added_date = added_date
        self.date_completed = date_completed
        self.nutrition = dict(nutrition) if nutrition else None

    @property
    def is_active(self) -> bool:
        return self.status == ItemStatus.ACTIVE

    @property
    def needs_image(self) -> bool:
        '''True while the item still shows a placeholder picture.'''
        return not self.image_url or any(host in self.image_url for host in PLACEHOLDER_IMAGE_HOSTS)

    @property
    def has_local_image(self) -> bool:
        return self.image_url.startswith(LOCAL_IMAGE_PREFIX)

    def complete(self, status: ItemStatus, when: datetime) -> bool:
        '''
        Moves an Active item to a terminal status and stamps date_completed.
        Returns False (and changes nothing) if the item already left Active.
        '''
        status = ItemStatus(status)
        if status not in TERMINAL_STATUSES:
            raise ValueError(f"Cannot move an item back to {status.value}")
        if not self.is_active:
            return False
        self.status = status
        self.date_completed = when.isoformat()
        return True

    def __str__(self) -> str:
        parts = [f"{self.product_name} - {self.quantity} {self.quantity_unit.value}", self.status.value]
        if self.expiry_date:
            parts.append(f"Exp: {self.expiry_date}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data) -> "PantryItem":
        '''Creates a PantryItem from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "product_name", "category", "expiry_date", "quantity", "quantity_unit",
                   "image_url", "status", "added_date", "date_completed", "nutrition"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered.setdefault("id", "")
        try:
            ItemStatus(filtered.get("status", ItemStatus.ACTIVE))
        except ValueError:
            filtered["status"] = ItemStatus.ACTIVE
        try:
            QuantityUnit(filtered.get("quantity_unit", QuantityUnit.PCS))
        except ValueError:
            filtered["quantity_unit"] = QuantityUnit.PCS
        return PantryItem(**filtered)

    def to_dict(self) -> dict:
        '''Converts the PantryItem to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "product_name": self.product_name,
            "category": self.category,
            "expiry_date": self.expiry_date,
            "quantity": self.quantity,
            "quantity_unit": self.quantity_unit.value,
            "image_url": self.image_url,
            "status": self.status.value,
            "added_date": self.added_date,
            "date_completed": self.date_completed,
            "nutrition": self.nutrition,
        }
