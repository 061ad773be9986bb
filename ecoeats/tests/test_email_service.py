import unittest
from unittest import mock

from ecoeats.infra.email_service import EmailService


class TestEmailService(unittest.TestCase):

    def test_simulation_mode_only_logs(self):
        service = EmailService(host='')
        with self.assertLogs('ecoeats.infra.email_service', level='INFO') as logs:
            self.assertTrue(service.send_welcome_email("Asha", "asha@example.com"))
        self.assertIn("SIMULATION", logs.output[0])

    def test_digest_lists_items(self):
        html = EmailService(host='').render(
            'expiry_digest.html', name="Asha",
            expired=[{'product_name': 'Milk', 'days_left': -1}],
            expiring_soon=[{'product_name': 'Bread', 'days_left': 2}],
        )
        self.assertIn("Milk", html)
        self.assertIn("Bread (2 days left)", html)

    def test_names_are_escaped(self):
        html = EmailService(host='').render('welcome.html', name="<b>Eve</b>", email="eve@example.com", year=2026)
        self.assertNotIn("<b>Eve</b>", html)

    def test_smtp_failure_returns_false(self):
        service = EmailService(host='smtp.example.com', port=587)
        with mock.patch('ecoeats.infra.email_service.smtplib.SMTP', side_effect=OSError("unreachable")):
            sent = service.send_expiry_notification_email("Asha", "asha@example.com", [], [])
        self.assertFalse(sent)


if __name__ == '__main__':
    unittest.main()
