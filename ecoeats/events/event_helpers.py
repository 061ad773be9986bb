"""Event helper utilities.

Publishing helpers shared by the ledgers. Every helper takes the bus
explicitly so tests can hand in a private EventBus.

Quick import:
    from ecoeats.events.event_helpers import (
        notify, publish_points_awarded, publish_image_resolved, publish_expiry_digest
    )
"""
from __future__ import annotations
from typing import Iterable, Any
from .Event_Bus import (
    EventBus, UI_NOTIFICATION, POINTS_AWARDED, PANTRY_IMAGE_RESOLVED, PANTRY_EXPIRY_DIGEST
)

__all__ = ['notify', 'publish_points_awarded', 'publish_image_resolved', 'publish_expiry_digest']


def notify(bus: EventBus, message: str, kind: str = 'success'):
    """Publish a one-way toast notification."""
    bus.publish(UI_NOTIFICATION, {'message': message, 'kind': kind})


def publish_points_awarded(bus: EventBus, user: Any, points: int):
    bus.publish(POINTS_AWARDED, {
        'user_id': user.id,
        'points': points,
        'total': user.eco_points,
        'level': user.level.value,
    })


def publish_image_resolved(bus: EventBus, user_id: str, item_id: str, image_url: str):
    """Post the result of a background image lookup; the receiver validates it first."""
    bus.publish(PANTRY_IMAGE_RESOLVED, {
        'user_id': user_id,
        'item_id': item_id,
        'image_url': image_url,
    })


def publish_expiry_digest(bus: EventBus, user_id: str, expired: Iterable[dict], expiring_soon: Iterable[dict]):
    """Publish the daily snapshot of expired and soon-to-expire items.

    Payload structure:
        {
          'user_id': <str>,
          'expired': [ { id, product_name, expiry_date, days_left }, ... ],
          'expiring_soon': [ ... ]
        }
    """
    bus.publish(PANTRY_EXPIRY_DIGEST, {
        'user_id': user_id,
        'expired': list(expired),
        'expiring_soon': list(expiring_soon),
    })
