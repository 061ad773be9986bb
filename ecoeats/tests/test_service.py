import unittest

from ecoeats.events.Event_Bus import PANTRY_EXPIRY_DIGEST
from ecoeats.tests.support import RecordingEmailService, add_active_item, collect, make_service, make_user
from ecoeats.utilities.errors import NotAuthenticatedError, ValidationError


class TestAuth(unittest.TestCase):

    def setUp(self):
        self.emails = RecordingEmailService()
        self.service = make_service(email_service=self.emails)

    def test_sign_up_starts_at_zero_and_logs_in(self):
        user = self.service.sign_up("Meera", "Meera@Example.com", "secret123")
        self.assertEqual(user.eco_points, 0)
        self.assertEqual(user.level.value, "EcoSaver")
        self.assertNotEqual(user.password_hash, "secret123")
        self.assertIs(self.service.current_user(), user)
        self.assertEqual(self.emails.sent, [('welcome', "Meera@Example.com")])

    def test_duplicate_email_and_short_password(self):
        self.service.sign_up("Meera", "meera@example.com", "secret123")
        with self.assertRaises(ValidationError):
            self.service.sign_up("Other", "MEERA@example.com", "secret123")
        with self.assertRaises(ValidationError):
            self.service.sign_up("Short", "short@example.com", "123")
        with self.assertRaises(ValidationError):
            self.service.sign_up("Kind", "kind@example.com", "secret123", "Alien")

    def test_login_and_logout(self):
        user = self.service.sign_up("Meera", "meera@example.com", "secret123")
        add_active_item(self.service, user.id, "Rice")
        self.service.logout()
        self.assertIsNone(self.service.current_user())
        with self.assertRaises(NotAuthenticatedError):
            self.service.require_user()

        self.assertIsNone(self.service.login("meera@example.com", "wrong-pass"))
        self.assertIs(self.service.login("meera@example.com", "secret123"), user)
        self.assertEqual(len(self.service.store.pantry(user.id)), 1)


class TestDailyExpiryCheck(unittest.TestCase):

    def test_sends_digest_once_per_day(self):
        emails = RecordingEmailService()
        service = make_service(email_service=emails)
        user = make_user(service)
        add_active_item(service, user.id, "Milk", days=-1)
        add_active_item(service, user.id, "Bread", days=2)
        add_active_item(service, user.id, "Rice", days=30)
        digests = collect(service.bus, PANTRY_EXPIRY_DIGEST)

        first = service.daily_expiry_check()
        second = service.daily_expiry_check()

        self.assertTrue(first['sent'])
        self.assertEqual([i['product_name'] for i in first['expired']], ["Milk"])
        self.assertEqual([i['product_name'] for i in first['expiring_soon']], ["Bread"])
        self.assertFalse(second['ran'])
        self.assertEqual(len(digests), 1)
        self.assertEqual([e[0] for e in emails.sent], ['welcome', 'expiry'])

        service.clock.advance(days=1)
        self.assertTrue(service.daily_expiry_check()['ran'])

    def test_failed_send_retries(self):
        emails = RecordingEmailService(succeed=False)
        service = make_service(email_service=emails)
        user = make_user(service)
        add_active_item(service, user.id, "Milk", days=0)

        self.assertFalse(service.daily_expiry_check()['sent'])
        self.assertIsNone(service.store.repository.last_expiry_email_date())
        emails.succeed = True
        self.assertTrue(service.daily_expiry_check()['sent'])
        self.assertEqual(service.store.repository.last_expiry_email_date(), "2026-10-16")

    def test_nothing_to_report(self):
        service = make_service()
        user = make_user(service)
        add_active_item(service, user.id, "Rice", days=30)
        result = service.daily_expiry_check()
        self.assertTrue(result['ran'])
        self.assertFalse(result['sent'])

    def test_no_user_logged_in(self):
        service = make_service()
        self.assertFalse(service.daily_expiry_check()['ran'])


class TestStatsAndRewards(unittest.TestCase):

    def setUp(self):
        self.service = make_service()
        self.user = make_user(self.service)

    def test_impact_stats(self):
        a = add_active_item(self.service, self.user.id, "Apple")
        b = add_active_item(self.service, self.user.id, "Pear")
        c = add_active_item(self.service, self.user.id, "Plum", days=1)
        add_active_item(self.service, self.user.id, "Fig", days=-1)
        self.service.pantry.update_status(self.user.id, a.id, "Used")
        self.service.donations.record_donation(self.user.id, [b.id, c.id], "Roti Bank")

        stats = self.service.impact_stats(self.user.id)

        self.assertEqual(stats['items_saved'], 1)
        self.assertEqual(stats['items_donated'], 2)
        self.assertEqual(stats['donation_count'], 1)
        self.assertAlmostEqual(stats['food_saved_kg'], 0.9)
        self.assertAlmostEqual(stats['co2_saved_kg'], 0.27)
        self.assertEqual(stats['active_items'], 1)
        self.assertEqual(stats['expired'], 1)

    def test_leaderboard_only_lists_consumers(self):
        self.user.eco_points = 40
        top = make_user(self.service, "Kiran", "kiran@example.com", points=90)
        make_user(self.service, "Cafe", "cafe@example.com", points=500, user_type="Restaurant")

        board = self.service.leaderboard()

        self.assertEqual([row['user_id'] for row in board], [top.id, self.user.id])
        self.assertEqual(board[0]['rank'], 1)

    def test_rewards_summary(self):
        self.user.eco_points = 150
        summary = self.service.rewards_summary(self.user.id)
        self.assertEqual(summary['eligible_tier']['tier'], 1)
        self.assertEqual(summary['next_tier']['tier'], 2)
        self.assertEqual(summary['points_to_next_tier'], 50)
        self.assertEqual(summary['level'], "EcoWarrior")
        self.assertEqual(len(summary['tiers']), 4)

    def test_donation_report_is_pdf(self):
        item = add_active_item(self.service, self.user.id, "Rice")
        self.service.donations.record_donation(self.user.id, [item.id], "Feeding India")
        pdf = self.service.donation_report_pdf(self.user.id)
        self.assertTrue(pdf.startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
