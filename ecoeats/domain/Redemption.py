"""Reward tiers and redemption history entries."""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class RewardType(str, Enum):
    DISCOUNT = "discount"
    CASHBACK = "cashback"


@dataclass(frozen=True)
class RewardTier:
    tier: int
    min_points: int
    points_deducted: int
    discount_percent: int
    cashback_amount: Decimal
    name: str

    def to_dict(self) -> dict:
        return {
            "tier": self.tier,
            "min_points": self.min_points,
            "points_deducted": self.points_deducted,
            "discount_percent": self.discount_percent,
            "cashback_amount": str(self.cashback_amount),
            "name": self.name,
        }


@dataclass(frozen=True)
class RedemptionEntry:
    """Append-only history row written by RedemptionAccount."""
    id: str
    reward_type: RewardType
    reward_value: str
    points_spent: int
    date_redeemed: str

    @staticmethod
    def from_dict(data) -> "RedemptionEntry":
        return RedemptionEntry(
            id=str(data["id"]),
            reward_type=RewardType(data["reward_type"]),
            reward_value=data.get("reward_value", ""),
            points_spent=int(data.get("points_spent", 0)),
            date_redeemed=data.get("date_redeemed", ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "reward_type": self.reward_type.value,
            "reward_value": self.reward_value,
            "points_spent": self.points_spent,
            "date_redeemed": self.date_redeemed,
        }
