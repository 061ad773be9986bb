import logging
import tempfile
import unittest
from decimal import Decimal

from ecoeats.infra.kv_store import JsonFileStore, MemoryStore
from ecoeats.infra.Snapshot_Repository import SnapshotRepository
from ecoeats.logic.store import EcoEatsStore
from ecoeats.tests.support import add_active_item, make_service, make_user
from ecoeats.utilities.errors import PersistenceWriteFailure


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise PersistenceWriteFailure(f"disk full while writing {key}")


class TestSnapshotPersistence(unittest.TestCase):

    def test_round_trip_through_memory_store(self):
        kv = MemoryStore()
        service = make_service(kv=kv)
        user = make_user(service, points=260)
        rice = add_active_item(service, user.id, "Rice")
        add_active_item(service, user.id, "Beans")
        service.donations.record_donation(user.id, [rice.id], "No Food Waste")
        service.redemption.redeem(user.id, "cashback")

        reloaded = EcoEatsStore(SnapshotRepository(kv))

        again = reloaded.get_user(user.id)
        self.assertEqual(reloaded.current_user_id, user.id)
        self.assertEqual(again.eco_points, user.eco_points)
        self.assertEqual(again.wallet_balance, Decimal("25"))
        self.assertEqual(again.level, user.level)
        self.assertTrue(again.check_password("secret123"))
        self.assertEqual([i.to_dict() for i in reloaded.pantry(user.id)],
                         [i.to_dict() for i in service.store.pantry(user.id)])
        self.assertEqual(reloaded.donations(user.id), service.store.donations(user.id))
        self.assertEqual(reloaded.redemptions(user.id), service.store.redemptions(user.id))

    def test_persisted_level_is_ignored(self):
        kv = MemoryStore()
        kv.set('users', [{'id': 'u1', 'name': 'Ravi', 'email': 'ravi@example.com',
                          'eco_points': 150, 'level': 'Planet Protector'}])
        store = EcoEatsStore(SnapshotRepository(kv))
        self.assertEqual(store.get_user('u1').level.value, "EcoWarrior")

    def test_malformed_entries_are_skipped(self):
        kv = MemoryStore()
        kv.set('donations_u1', [{'id': 'd1', 'user_id': 'u1', 'item_ids': ['a'], 'ngo_name': 'X',
                                 'date_donated': '2026-10-01', 'points_earned': 15}, {'oops': True}])
        self.assertEqual(len(SnapshotRepository(kv).load_donations('u1')), 1)

    def test_write_failure_keeps_memory_state(self):
        service = make_service(kv=FailingStore())
        with self.assertLogs('ecoeats.logic.store', level=logging.ERROR):
            user = make_user(service)
            service.points.award(user.id, 5)
        self.assertEqual(service.store.get_user(user.id).eco_points, 5)

    def test_json_file_store_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = JsonFileStore(tmp)
            store.set('pantry_u/1', [{'id': 'x'}])
            self.assertEqual(store.get('pantry_u/1'), [{'id': 'x'}])
            self.assertEqual(store.get('missing', 'default'), 'default')
            store.delete('pantry_u/1')
            self.assertIsNone(store.get('pantry_u/1'))


if __name__ == '__main__':
    unittest.main()
