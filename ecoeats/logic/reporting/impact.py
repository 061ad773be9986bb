"""Impact statistics and leaderboard.

Pure aggregation over the store's tables; nothing here mutates state.
"""
from collections import Counter
from datetime import date, tzinfo
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ecoeats.domain.Donation import Donation
from ecoeats.domain.PantryItem import ItemStatus, PantryItem
from ecoeats.domain.User import User, UserType
from ecoeats.logic.expiry.classifier import ExpiryStatus, classify
from ecoeats.utilities.constants import CO2_KG_PER_FOOD_KG, KG_PER_ITEM

__all__ = ["compute_impact_stats", "compute_leaderboard"]


def compute_impact_stats(items: Iterable[PantryItem], donations: Iterable[Donation],
                         today: date, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    """Aggregate home-screen statistics.

    Returns structure:
    {
      'items_saved': int,            # items marked Used
      'items_donated': int,          # summed from the donation log
      'donation_count': int,
      'food_saved_kg': float,
      'co2_saved_kg': float,
      'active_items': int, 'expiring_soon': int, 'expired': int
    }
    """
    items = list(items)
    donations = list(donations)
    saved = sum(1 for i in items if i.status == ItemStatus.USED)
    # The donation log stays authoritative even after donated items are deleted
    donated = sum(d.item_count for d in donations)
    food_kg = Decimal(saved + donated) * KG_PER_ITEM
    co2_kg = food_kg * CO2_KG_PER_FOOD_KG

    bands = Counter(classify(i.expiry_date, today, tz) for i in items if i.status == ItemStatus.ACTIVE)
    return {
        'items_saved': saved,
        'items_donated': donated,
        'donation_count': len(donations),
        'food_saved_kg': float(round(food_kg, 2)),
        'co2_saved_kg': float(round(co2_kg, 2)),
        'active_items': sum(bands.values()),
        'expiring_soon': bands[ExpiryStatus.EXPIRING_SOON],
        'expired': bands[ExpiryStatus.EXPIRED],
    }


def compute_leaderboard(users: Iterable[User], limit: Optional[int] = 10) -> List[Dict[str, Any]]:
    """Consumers ranked by EcoPoints, highest first; ties keep name order."""
    consumers = [u for u in users if u.user_type == UserType.CONSUMER]
    consumers.sort(key=lambda u: (-u.eco_points, u.name.lower()))
    if limit is not None:
        consumers = consumers[:limit]
    return [
        {
            'rank': pos,
            'user_id': u.id,
            'name': u.name,
            'eco_points': u.eco_points,
            'level': u.level.value,
            'has_eco_badge': u.has_eco_badge,
        }
        for pos, u in enumerate(consumers, start=1)
    ]
