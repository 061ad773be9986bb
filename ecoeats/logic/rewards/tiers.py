"""Reward tier table and eligibility lookups.

Both lookups depend on the current point balance only. Redemption history is
not consulted, so a tier can be redeemed again once the points are re-earned.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Optional, Tuple

from ecoeats.domain.Redemption import RewardTier

__all__ = ["REWARD_TIERS", "eligible_tier", "next_tier", "top_tier"]

REWARD_TIERS: Tuple[RewardTier, ...] = (
    RewardTier(tier=1, min_points=100, points_deducted=100, discount_percent=5,
               cashback_amount=Decimal("10"), name="Seedling Reward"),
    RewardTier(tier=2, min_points=200, points_deducted=200, discount_percent=10,
               cashback_amount=Decimal("25"), name="Sprout Reward"),
    RewardTier(tier=3, min_points=500, points_deducted=500, discount_percent=20,
               cashback_amount=Decimal("75"), name="Evergreen Reward"),
    RewardTier(tier=4, min_points=1000, points_deducted=1000, discount_percent=30,
               cashback_amount=Decimal("200"), name="Planet Reward"),
)


def eligible_tier(points: int, tiers: Tuple[RewardTier, ...] = REWARD_TIERS) -> Optional[RewardTier]:
    """Highest tier whose threshold is met (not the first match)."""
    qualifying = [t for t in tiers if t.min_points <= points]
    return max(qualifying, key=lambda t: t.min_points) if qualifying else None


def next_tier(points: int, tiers: Tuple[RewardTier, ...] = REWARD_TIERS) -> Optional[RewardTier]:
    """Lowest tier still out of reach, for progress messaging."""
    locked = [t for t in tiers if t.min_points > points]
    return min(locked, key=lambda t: t.min_points) if locked else None


def top_tier(tiers: Tuple[RewardTier, ...] = REWARD_TIERS) -> RewardTier:
    return max(tiers, key=lambda t: t.min_points)
