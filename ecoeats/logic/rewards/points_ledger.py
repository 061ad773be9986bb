"""PointsLedger: the only code that writes User.eco_points."""
import logging
from typing import Optional

from ecoeats.domain.User import User
from ecoeats.events.Event_Bus import EventBus
from ecoeats.events.event_helpers import notify, publish_points_awarded
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.errors import InsufficientPoints, ValidationError

logger = logging.getLogger(__name__)


def _check_points(points) -> int:
    if isinstance(points, bool) or not isinstance(points, int):
        raise ValidationError(f"Points must be an integer, got {points!r}")
    if points < 0:
        raise ValidationError(f"Points cannot be negative: {points}")
    return points


def award_message(points: int, reason: Optional[str] = None) -> str:
    if reason:
        return f"{reason}! (+{points} EcoPoints)"
    return f"You earned +{points} EcoPoints!"


class PointsLedger:
    def __init__(self, store: EcoEatsStore, bus: EventBus):
        self.store = store
        self.bus = bus

    def award(self, user_id: str, points: int, reason: Optional[str] = None) -> User:
        '''
        Adds points to the user's balance. The level follows automatically
        because it is derived from eco_points. Negative awards are rejected;
        deductions go through deduct().
        '''
        points = _check_points(points)
        user = self.store.get_user(user_id)
        if points == 0:
            return user
        user.eco_points += points
        self.store.persist_users()
        logger.info(f"Awarded {points} EcoPoints to {user.id} ({reason or 'no reason'}); "
                    f"total={user.eco_points} level={user.level.value}")
        publish_points_awarded(self.bus, user, points)
        notify(self.bus, award_message(points, reason), 'success')
        return user

    def deduct(self, user_id: str, points: int) -> User:
        '''Removes points for a redemption. A deduction can lower the level.'''
        points = _check_points(points)
        user = self.store.get_user(user_id)
        if points > user.eco_points:
            raise InsufficientPoints(f"{user.id} has {user.eco_points} EcoPoints, {points} required")
        user.eco_points -= points
        self.store.persist_users()
        logger.info(f"Deducted {points} EcoPoints from {user.id}; total={user.eco_points}")
        return user
