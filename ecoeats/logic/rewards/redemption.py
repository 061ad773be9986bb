"""RedemptionAccount: spends EcoPoints on the eligible reward tier."""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from ecoeats.domain.Redemption import RedemptionEntry, RewardType
from ecoeats.events.Event_Bus import EventBus
from ecoeats.events.event_helpers import notify
from ecoeats.infra.clock import SystemClock
from ecoeats.logic.rewards.points_ledger import PointsLedger
from ecoeats.logic.rewards.tiers import eligible_tier, next_tier, top_tier
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.constants import CURRENCY_SYMBOL
from ecoeats.utilities.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedemptionResult:
    success: bool
    message: str
    entry: Optional[RedemptionEntry] = None

    def to_dict(self) -> dict:
        return {
            'success': self.success,
            'message': self.message,
            'entry': self.entry.to_dict() if self.entry else None,
        }


def _reward_type(value) -> RewardType:
    try:
        return RewardType(value)
    except ValueError:
        raise ValidationError(f"Unknown reward type: {value!r}")


class RedemptionAccount:
    def __init__(self, store: EcoEatsStore, ledger: PointsLedger, clock=None, bus: EventBus = None):
        self.store = store
        self.ledger = ledger
        self.clock = clock or SystemClock()
        self.bus = bus if bus is not None else ledger.bus

    def redeem(self, user_id: str, reward_type) -> RedemptionResult:
        '''
        Redeems the highest tier the user currently qualifies for.

        Everything the mutation needs is computed up front; the deduction,
        wallet credit, badge and history append then run back to back.
        An ineligible user gets success=False and nothing changes.
        '''
        reward_type = _reward_type(reward_type)
        user = self.store.get_user(user_id)
        tier = eligible_tier(user.eco_points)
        if tier is None:
            upcoming = next_tier(user.eco_points)
            needed = upcoming.min_points - user.eco_points if upcoming else 0
            message = f"Not enough EcoPoints to redeem a reward. Earn {needed} more to unlock {upcoming.name}."
            logger.info(f"Redemption refused for {user.id}: {user.eco_points} EcoPoints")
            return RedemptionResult(False, message)

        if reward_type == RewardType.CASHBACK:
            reward_value = f"{CURRENCY_SYMBOL}{tier.cashback_amount}"
        else:
            reward_value = f"{tier.discount_percent}%"
        entry = RedemptionEntry(
            id=str(uuid.uuid4()),
            reward_type=reward_type,
            reward_value=reward_value,
            points_spent=tier.points_deducted,
            date_redeemed=self.clock.now().isoformat(),
        )
        earns_badge = tier.tier == top_tier().tier

        self.ledger.deduct(user.id, tier.points_deducted)
        if reward_type == RewardType.CASHBACK:
            user.wallet_balance += tier.cashback_amount
        if earns_badge:
            user.has_eco_badge = True
        self.store.redemptions(user.id).append(entry)
        self.store.persist_users()
        self.store.persist_redemptions(user.id)

        logger.info(f"{user.id} redeemed {tier.name} as {reward_type.value} ({reward_value}) "
                    f"for {tier.points_deducted} EcoPoints")
        if reward_type == RewardType.CASHBACK:
            message = f"{reward_value} cashback added to your wallet!"
        else:
            message = f"{reward_value} discount coupon unlocked!"
        notify(self.bus, message, 'success')
        return RedemptionResult(True, message, entry)
