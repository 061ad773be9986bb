"""User domain entity: identity, EcoPoints balance, wallet and badge. Level is derived, never stored."""
import hashlib
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional
from ecoeats.domain.UserLevel import UserLevel, level_for_points


class UserType(str, Enum):
    CONSUMER = "Consumer"
    RESTAURANT = "Restaurant"
    NGO = "NGO"


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


class User:
    def __init__(self, id: str, name: str = "", email: str = "", password_hash: str = "",
                 user_type: UserType = UserType.CONSUMER, eco_points: int = 0,
                 wallet_balance: Decimal = Decimal("0"), has_eco_badge: bool = False,
                 profile_image: str = ""):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.user_type = UserType(user_type)
        # Written only by PointsLedger
        self.eco_points = eco_points
        self.wallet_balance = Decimal(wallet_balance)
        self.has_eco_badge = has_eco_badge
        self.profile_image = profile_image

    @property
    def level(self) -> UserLevel:
        return level_for_points(self.eco_points)

    def check_password(self, password: str) -> bool:
        return bool(self.password_hash) and self.password_hash == hash_password(password)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> - {self.eco_points} EcoPoints - {self.level.value}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data) -> "User":
        '''Creates a User from a persisted dictionary. A stored level is ignored and recomputed.'''
        d = dict(data) if isinstance(data, dict) else {}
        try:
            wallet = Decimal(str(d.get("wallet_balance", "0")))
        except InvalidOperation:
            wallet = Decimal("0")
        try:
            user_type = UserType(d.get("user_type", UserType.CONSUMER.value))
        except ValueError:
            user_type = UserType.CONSUMER
        return User(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            email=d.get("email", ""),
            password_hash=d.get("password_hash", ""),
            user_type=user_type,
            eco_points=max(int(d.get("eco_points", 0) or 0), 0),
            wallet_balance=max(wallet, Decimal("0")),
            has_eco_badge=bool(d.get("has_eco_badge", False)),
            profile_image=d.get("profile_image", ""),
        )

    def to_dict(self, include_secret: bool = True) -> dict:
        '''Converts the User to a dictionary; the level is included for readers only.'''
        d = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "user_type": self.user_type.value,
            "eco_points": self.eco_points,
            "level": self.level.value,
            "wallet_balance": str(self.wallet_balance),
            "has_eco_badge": self.has_eco_badge,
            "profile_image": self.profile_image,
        }
        if include_secret:
            d["password_hash"] = self.password_hash
        return d


def find_user(users, user_id: Optional[str]) -> Optional[User]:
    """Pure lookup of a user by id in a mapping or sequence."""
    if user_id is None:
        return None
    if isinstance(users, dict):
        return users.get(user_id)
    return next((u for u in users if u.id == user_id), None)
