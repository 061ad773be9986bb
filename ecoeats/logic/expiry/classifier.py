"""Expiry classification helpers.

Pure functions shared by the pantry view, the donation screen and the recipe
screen, so all three agree on what "expired" means. An expiry value that does
not parse is treated as fresh everywhere and sorts after every dated item.
"""
from __future__ import annotations
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ecoeats.domain.PantryItem import ItemStatus
from ecoeats.utilities.constants import DATE_FORMAT, EXPIRING_SOON_DAYS

__all__ = [
    "ExpiryStatus", "parse_expiry", "days_until_expiry", "classify",
    "sort_by_urgency", "partition", "eligible_for_use", "describe",
]


class ExpiryStatus(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    FRESH = "fresh"


def parse_expiry(value: Any, tz: Optional[tzinfo] = None) -> Optional[date]:
    """Return the local calendar day of an expiry value, or None if it cannot be parsed.

    Accepts date/datetime objects, ISO-8601 strings (with or without a trailing 'Z')
    and DD-MM-YYYY strings. Aware datetimes are converted to `tz` (local zone by default).
    """
    if isinstance(value, datetime):
        return value.astimezone(tz).date() if value.tzinfo is not None else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        return parse_expiry(datetime.fromisoformat(text), tz)
    except ValueError:
        pass
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def days_until_expiry(expiry: Any, today: date, tz: Optional[tzinfo] = None) -> Optional[int]:
    """Whole calendar days from `today` to the expiry day (negative once expired)."""
    if isinstance(today, datetime):
        today = today.date()
    exp_day = parse_expiry(expiry, tz)
    if exp_day is None:
        return None
    return (exp_day - today).days


def classify(expiry: Any, today: date, tz: Optional[tzinfo] = None) -> ExpiryStatus:
    days = days_until_expiry(expiry, today, tz)
    if days is None:
        return ExpiryStatus.FRESH
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days <= EXPIRING_SOON_DAYS:
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.FRESH


def _urgency_key(item, today: date, tz: Optional[tzinfo]):
    days = days_until_expiry(item.expiry_date, today, tz)
    return (days is None, days if days is not None else 0)


def sort_by_urgency(items: Iterable, today: date, tz: Optional[tzinfo] = None) -> List:
    """Ascending days-until-expiry; unparseable dates last (stable)."""
    return sorted(items, key=lambda item: _urgency_key(item, today, tz))


def partition(items: Iterable, today: date, tz: Optional[tzinfo] = None) -> Dict[str, List]:
    """Group active items into expired / expiring_soon / fresh, each sorted by urgency."""
    groups: Dict[str, List] = {s.value: [] for s in ExpiryStatus}
    for item in sort_by_urgency((i for i in items if i.status == ItemStatus.ACTIVE), today, tz):
        groups[classify(item.expiry_date, today, tz).value].append(item)
    return groups


def eligible_for_use(items: Iterable, today: date, tz: Optional[tzinfo] = None) -> List:
    """Active, not-expired items in urgency order (donation and recipe candidates)."""
    return sort_by_urgency(
        (i for i in items
         if i.status == ItemStatus.ACTIVE and classify(i.expiry_date, today, tz) != ExpiryStatus.EXPIRED),
        today, tz,
    )


def describe(item, today: date, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    """Flat view of an item with its expiry classification."""
    return {
        'id': item.id,
        'product_name': item.product_name,
        'expiry_date': item.expiry_date,
        'days_left': days_until_expiry(item.expiry_date, today, tz),
        'expiry_status': classify(item.expiry_date, today, tz).value,
    }
