"""EcoEatsService: the facade the API layer talks to.

Wires the ledgers together around one EcoEatsStore and adds the session,
the daily expiry digest, statistics and the rewards summary.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from jinja2 import TemplateError
from pydantic import ValidationError as PydanticValidationError

from ecoeats.domain.User import User, UserType, hash_password
from ecoeats.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from ecoeats.events.event_helpers import notify, publish_expiry_digest
from ecoeats.infra.clock import SystemClock
from ecoeats.infra.pdf_utils import generate_donation_report_pdf
from ecoeats.logic.donation.recorder import DonationRecorder
from ecoeats.logic.expiry.classifier import describe, partition
from ecoeats.logic.pantry.ledger import PantryLedger
from ecoeats.logic.recipes.cookbook import RecipeCookbook
from ecoeats.logic.reporting.impact import compute_impact_stats, compute_leaderboard
from ecoeats.logic.rewards.levels import level_progress
from ecoeats.logic.rewards.points_ledger import PointsLedger
from ecoeats.logic.rewards.redemption import RedemptionAccount
from ecoeats.logic.rewards.tiers import REWARD_TIERS, eligible_tier, next_tier
from ecoeats.logic.store import EcoEatsStore
from ecoeats.utilities.config import COLLABORATOR_TIMEOUT_SECONDS
from ecoeats.utilities.constants import ISO_DAY_FORMAT
from ecoeats.utilities.errors import NotAuthenticatedError, ValidationError
from ecoeats.utilities.validators import SignUpInput

logger = logging.getLogger(__name__)


class EcoEatsService:
    def __init__(self, store: EcoEatsStore, clock=None, bus: Optional[EventBus] = None,
                 collaborators=None, image_store=None, email_service=None,
                 timeout: float = COLLABORATOR_TIMEOUT_SECONDS):
        self.store = store
        self.clock = clock or SystemClock()
        self.bus = bus if bus is not None else GLOBAL_EVENT_BUS
        self.email_service = email_service
        self.points = PointsLedger(store, self.bus)
        self.redemption = RedemptionAccount(store, self.points, self.clock, self.bus)
        self.pantry = PantryLedger(store, self.points, self.clock, self.bus,
                                   collaborators=collaborators, image_store=image_store, timeout=timeout)
        self.donations = DonationRecorder(store, self.points, self.clock, self.bus)
        self.cookbook = RecipeCookbook(self.pantry, collaborators=collaborators, timeout=timeout)

    # --- Session -------------------------------------------------------------
    def current_user(self) -> Optional[User]:
        return self.store.current_user()

    def require_user(self) -> User:
        user = self.store.current_user()
        if user is None:
            raise NotAuthenticatedError("Please log in first")
        return user

    def sign_up(self, name: str, email: str, password: str, user_type: str = UserType.CONSUMER.value) -> User:
        '''Creates an account with 0 EcoPoints and logs it in. Emails are unique, case-insensitively.'''
        try:
            data = SignUpInput(name=name or "", email=email or "", password=password or "",
                               user_type=UserType(user_type).value if user_type else UserType.CONSUMER.value)
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError(f"Invalid sign-up details: {e}") from e
        if self.store.find_user_by_email(data.email) is not None:
            raise ValidationError("An account with this email already exists")

        user = User(
            id=str(uuid.uuid4()),
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            user_type=UserType(data.user_type),
        )
        self.store.users[user.id] = user
        self.store.current_user_id = user.id
        self.store.persist_users()
        self.store.persist_session()
        logger.info(f"New {user.user_type.value} account {user.id}")
        self._send_welcome(user)
        notify(self.bus, f"Welcome to EcoEats, {user.name}!", 'success')
        return user

    def _send_welcome(self, user: User):
        if self.email_service is None:
            return
        try:
            self.email_service.send_welcome_email(user.name, user.email)
        except TemplateError as e:
            logger.error(f"Could not render welcome email for {user.id}: {e}")

    def login(self, email: str, password: str) -> Optional[User]:
        user = self.store.find_user_by_email(email)
        if user is None or not user.check_password(password or ""):
            logger.info("Failed login attempt")
            return None
        self.store.current_user_id = user.id
        self.store.persist_session()
        logger.info(f"User {user.id} logged in")
        return user

    def logout(self):
        '''Clears the session pointer only; pantry and history stay persisted.'''
        self.store.current_user_id = None
        self.store.persist_session()

    # --- Daily expiry digest -------------------------------------------------
    def daily_expiry_check(self) -> Dict[str, Any]:
        '''
        Once per calendar day: partitions the current user's active items and
        sends the digest when anything is expired or expiring soon. The day is
        only recorded after a successful send, so a failed send retries later.
        '''
        user = self.store.current_user()
        today = self.clock.today()
        day_key = today.strftime(ISO_DAY_FORMAT)
        result = {'ran': False, 'sent': False, 'expired': [], 'expiring_soon': []}
        if user is None:
            return result
        repository = self.store.repository
        if repository.last_expiry_email_date() == day_key:
            return result

        result['ran'] = True
        groups = partition(self.store.pantry(user.id), today, self.clock.tz)
        expired = [describe(i, today, self.clock.tz) for i in groups['expired']]
        expiring = [describe(i, today, self.clock.tz) for i in groups['expiring_soon']]
        result['expired'], result['expiring_soon'] = expired, expiring
        if not expired and not expiring:
            return result

        publish_expiry_digest(self.bus, user.id, expired, expiring)
        notify(self.bus, f"{len(expired)} expired and {len(expiring)} expiring soon in your pantry.", 'warning')

        sent = False
        if self.email_service is not None:
            try:
                sent = self.email_service.send_expiry_notification_email(user.name, user.email, expired, expiring)
            except TemplateError as e:
                logger.error(f"Could not render expiry digest for {user.id}: {e}")
        if sent:
            self.store.persist_flag('last expiry email date',
                                    lambda: repository.save_last_expiry_email_date(day_key))
        result['sent'] = sent
        return result

    # --- Statistics & rewards ------------------------------------------------
    def impact_stats(self, user_id: str) -> Dict[str, Any]:
        self.store.get_user(user_id)
        return compute_impact_stats(self.store.pantry(user_id), self.store.donations(user_id),
                                    self.clock.today(), self.clock.tz)

    def leaderboard(self, limit: Optional[int] = 10) -> List[Dict[str, Any]]:
        return compute_leaderboard(self.store.users.values(), limit)

    def rewards_summary(self, user_id: str) -> Dict[str, Any]:
        user = self.store.get_user(user_id)
        tier = eligible_tier(user.eco_points)
        upcoming = next_tier(user.eco_points)
        history = sorted(self.store.redemptions(user_id), key=lambda e: e.date_redeemed, reverse=True)
        return {
            'eco_points': user.eco_points,
            'level': user.level.value,
            'level_progress': level_progress(user.eco_points),
            'eligible_tier': tier.to_dict() if tier else None,
            'next_tier': upcoming.to_dict() if upcoming else None,
            'points_to_next_tier': (upcoming.min_points - user.eco_points) if upcoming else 0,
            'wallet_balance': str(user.wallet_balance),
            'has_eco_badge': user.has_eco_badge,
            'tiers': [t.to_dict() for t in REWARD_TIERS],
            'history': [e.to_dict() for e in history],
        }

    def donation_report_pdf(self, user_id: str) -> bytes:
        user = self.store.get_user(user_id)
        return generate_donation_report_pdf(user, self.donations.history(user_id))
