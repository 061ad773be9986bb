"""Donation record: immutable ledger entry of items given to an NGO."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Donation:
    id: str
    user_id: str
    item_ids: Tuple[str, ...]
    ngo_name: str
    date_donated: str
    points_earned: int

    @property
    def item_count(self) -> int:
        return len(self.item_ids)

    @staticmethod
    def from_dict(data) -> "Donation":
        return Donation(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            item_ids=tuple(data.get("item_ids", ())),
            ngo_name=data.get("ngo_name", ""),
            date_donated=data.get("date_donated", ""),
            points_earned=int(data.get("points_earned", 0)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "item_ids": list(self.item_ids),
            "ngo_name": self.ngo_name,
            "date_donated": self.date_donated,
            "points_earned": self.points_earned,
        }
