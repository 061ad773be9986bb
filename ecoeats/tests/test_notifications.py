import unittest

from ecoeats.events.Event_Bus import EventBus
from ecoeats.events.event_helpers import notify
from ecoeats.events.notifications import NotificationBuffer


class TestNotificationBuffer(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.buffer = NotificationBuffer(max_events=3).attach(self.bus)

    def test_cursor_returns_only_newer(self):
        notify(self.bus, "first")
        notify(self.bus, "second", 'warning')
        snapshot = self.buffer.get_events()
        self.assertEqual([e['message'] for e in snapshot['events']], ["first", "second"])
        self.assertEqual(snapshot['events'][1]['kind'], 'warning')

        notify(self.bus, "third")
        newer = self.buffer.get_events(since=snapshot['next_cursor'])
        self.assertEqual([e['message'] for e in newer['events']], ["third"])

    def test_ring_buffer_drops_oldest(self):
        for n in range(5):
            notify(self.bus, f"n{n}")
        self.assertEqual([e['message'] for e in self.buffer.get_events()['events']], ["n2", "n3", "n4"])

    def test_attach_is_idempotent(self):
        self.buffer.attach(self.bus)
        notify(self.bus, "once")
        self.assertEqual(len(self.buffer.get_events()['events']), 1)

    def test_failing_subscriber_does_not_break_publish(self):
        def broken(_name, _payload):
            raise RuntimeError("boom")
        self.bus.subscribe('ui.notification', broken)
        with self.assertLogs('ecoeats.events.Event_Bus', level='ERROR'):
            notify(self.bus, "still delivered")
        self.assertEqual(self.buffer.get_events()['events'][-1]['message'], "still delivered")


if __name__ == '__main__':
    unittest.main()
