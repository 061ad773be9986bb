import unittest
from decimal import Decimal

from ecoeats.logic.rewards.levels import UserLevel, level_for_points, level_progress
from ecoeats.logic.rewards.tiers import REWARD_TIERS, eligible_tier, next_tier


class TestLevels(unittest.TestCase):

    def test_boundaries(self):
        cases = {
            0: UserLevel.ECO_SAVER,
            100: UserLevel.ECO_SAVER,
            101: UserLevel.ECO_WARRIOR,
            300: UserLevel.ECO_WARRIOR,
            301: UserLevel.ECO_HERO,
            500: UserLevel.ECO_HERO,
            501: UserLevel.PLANET_PROTECTOR,
            5000: UserLevel.PLANET_PROTECTOR,
        }
        for points, expected in cases.items():
            self.assertEqual(level_for_points(points), expected, points)

    def test_levels_are_monotonic(self):
        order = [UserLevel.ECO_SAVER, UserLevel.ECO_WARRIOR, UserLevel.ECO_HERO, UserLevel.PLANET_PROTECTOR]
        ranks = [order.index(level_for_points(p)) for p in range(0, 700)]
        self.assertEqual(ranks, sorted(ranks))

    def test_progress_within_band(self):
        start = level_progress(0)
        self.assertEqual(start['progress_percent'], 0)
        self.assertEqual(start['next_level_points'], 101)
        self.assertEqual(start['points_to_next_level'], 101)

        mid = level_progress(201)
        self.assertEqual(mid['level'], "EcoWarrior")
        self.assertEqual(mid['progress_percent'], 50.0)
        self.assertEqual(mid['next_level_points'], 301)

        top = level_progress(800)
        self.assertEqual(top['level'], "Planet Protector")
        self.assertEqual(top['progress_percent'], 100.0)
        self.assertIsNone(top['next_level_points'])


class TestRewardTiers(unittest.TestCase):

    def test_table(self):
        self.assertEqual([t.min_points for t in REWARD_TIERS], [100, 200, 500, 1000])
        self.assertEqual(REWARD_TIERS[1].cashback_amount, Decimal("25"))
        self.assertTrue(all(t.points_deducted == t.min_points for t in REWARD_TIERS))

    def test_eligible_tier(self):
        self.assertIsNone(eligible_tier(99))
        self.assertEqual(eligible_tier(100).tier, 1)
        self.assertEqual(eligible_tier(499).tier, 2)
        self.assertEqual(eligible_tier(999).tier, 3)
        self.assertEqual(eligible_tier(1000).tier, 4)
        self.assertEqual(eligible_tier(25000).tier, 4)

    def test_next_tier(self):
        self.assertEqual(next_tier(0).tier, 1)
        self.assertEqual(next_tier(100).tier, 2)
        self.assertEqual(next_tier(999).tier, 4)
        self.assertIsNone(next_tier(1000))


if __name__ == '__main__':
    unittest.main()
