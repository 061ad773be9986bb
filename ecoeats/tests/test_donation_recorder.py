import unittest
from dataclasses import FrozenInstanceError

from ecoeats.domain.PantryItem import ItemStatus
from ecoeats.events.Event_Bus import UI_NOTIFICATION
from ecoeats.logic.donation.ngo_directory import find_nearby_ngos, haversine_km
from ecoeats.tests.support import add_active_item, collect, make_service, make_user
from ecoeats.utilities.errors import ValidationError


class TestDonationRecorder(unittest.TestCase):

    def setUp(self):
        self.service = make_service()
        self.user = make_user(self.service)
        self.a = add_active_item(self.service, self.user.id, "Rice")
        self.b = add_active_item(self.service, self.user.id, "Lentils")

    def test_donation_awards_fifteen_per_item(self):
        toasts = collect(self.service.bus, UI_NOTIFICATION)

        donation = self.service.donations.record_donation(self.user.id, [self.a.id, self.b.id], "Feeding India")

        self.assertEqual(donation.points_earned, 30)
        self.assertEqual(donation.item_ids, (self.a.id, self.b.id))
        self.assertEqual(self.user.eco_points, 30)
        self.assertEqual(self.a.status, ItemStatus.DONATED)
        self.assertEqual(self.b.status, ItemStatus.DONATED)
        self.assertIsNotNone(self.a.date_completed)
        self.assertEqual(toasts[-1]['message'], "Thank you for donating! (+30 EcoPoints)")

    def test_donation_survives_item_deletion(self):
        donation = self.service.donations.record_donation(self.user.id, [self.a.id, self.b.id], "Roti Bank")

        self.service.pantry.delete_item(self.user.id, self.a.id)

        self.assertEqual(self.service.store.donations(self.user.id), [donation])
        self.assertEqual(self.service.impact_stats(self.user.id)['items_donated'], 2)
        self.assertEqual(self.user.eco_points, 30)

    def test_donation_record_is_immutable(self):
        donation = self.service.donations.record_donation(self.user.id, [self.a.id], "Roti Bank")
        with self.assertRaises(FrozenInstanceError):
            donation.points_earned = 100

    def test_invalid_batches_mutate_nothing(self):
        self.service.pantry.update_status(self.user.id, self.b.id, "Used")
        points_before = self.user.eco_points
        bad_batches = [
            ([], "Feeding India"),
            ([self.a.id, self.a.id], "Feeding India"),
            ([self.a.id, "missing"], "Feeding India"),
            ([self.a.id, self.b.id], "Feeding India"),
            ([self.a.id], "   "),
        ]
        for item_ids, ngo in bad_batches:
            with self.assertRaises(ValidationError, msg=str(item_ids)):
                self.service.donations.record_donation(self.user.id, item_ids, ngo)
        self.assertEqual(self.a.status, ItemStatus.ACTIVE)
        self.assertEqual(self.service.store.donations(self.user.id), [])
        self.assertEqual(self.user.eco_points, points_before)

    def test_donatable_items_exclude_expired(self):
        add_active_item(self.service, self.user.id, "Old yogurt", days=-1)
        names = [i.product_name for i in self.service.donations.donatable_items(self.user.id)]
        self.assertEqual(sorted(names), ["Lentils", "Rice"])


class TestNgoDirectory(unittest.TestCase):

    def test_nearest_first(self):
        ngos = find_nearby_ngos(28.61, 77.21)
        self.assertEqual(ngos[0].id, "ngo1")
        self.assertLess(ngos[0].distance_km, 5)
        self.assertTrue(all(n.distance_km <= 100 for n in ngos))

    def test_nothing_nearby(self):
        self.assertEqual(find_nearby_ngos(0.0, 0.0), [])

    def test_radius_widens_search(self):
        ngos = find_nearby_ngos(19.0760, 72.8777, radius_km=1500)
        ids = [n.id for n in ngos]
        self.assertEqual(ids[0], "ngo3")
        self.assertIn("ngo4", ids)
        distances = [n.distance_km for n in ngos]
        self.assertEqual(distances, sorted(distances))

    def test_invalid_coordinates(self):
        for lat, lon in [(91, 0), (0, 181), ("north", 0), (float("nan"), 0)]:
            with self.assertRaises(ValidationError):
                find_nearby_ngos(lat, lon)

    def test_haversine_known_distance(self):
        # London to New York is roughly 5570 km
        self.assertAlmostEqual(haversine_km(51.5072, -0.1276, 40.7128, -74.0060), 5570, delta=20)


if __name__ == '__main__':
    unittest.main()
