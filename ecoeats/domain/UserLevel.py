"""UserLevel: gamification rank derived purely from an EcoPoints total."""
from enum import Enum
from ecoeats.utilities.constants import LEVEL_THRESHOLDS


class UserLevel(str, Enum):
    ECO_SAVER = "EcoSaver"
    ECO_WARRIOR = "EcoWarrior"
    ECO_HERO = "EcoHero"
    PLANET_PROTECTOR = "Planet Protector"


def level_for_points(points: int) -> UserLevel:
    '''Returns the level band that contains the given point total.'''
    for minimum, name in LEVEL_THRESHOLDS:
        if points >= minimum:
            return UserLevel(name)
    return UserLevel.ECO_SAVER
