"""Tests for the fold_legacy_trips management command"""

from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from ..models import Trip, Route, Reservation
from ..services import AvailabilityService


class FoldLegacyTripsTest(TestCase):
    def setUp(self):
        self.route = Route.objects.create(name='Norte', origin='CityA', destination='CityC', stops=['CityB'])
        schedule = [{'departureDate': '2025-05-28', 'departureTime': '08:00', 'price': 150}]
        self.parent = Trip.objects.create(route=self.route, company_id='c1', capacity=20, available_seats=18,
                                          trip_data=schedule)
        self.child = Trip.objects.create(route=self.route, company_id='c1', capacity=20, available_seats=18,
                                         is_sub_trip=True, parent_trip=self.parent,
                                         segment_origin='CityA', segment_destination='CityB',
                                         trip_data=[{'departureDate': '2025-05-28', 'price': 90}])
        self.reservation = Reservation.objects.create(
            company_id='c1', phone='1', trip_details={'recordId': self.child.id, 'tripId': str(self.child.id), 'seats': 2}
        )

    def test_dry_run_writes_nothing(self):
        out = StringIO()
        call_command('fold_legacy_trips', '--dry-run', stdout=out)

        self.assertIn('Dry run', out.getvalue())
        self.assertTrue(Trip.objects.filter(id=self.child.id).exists())

    def test_fold(self):
        out = StringIO()
        call_command('fold_legacy_trips', stdout=out)

        self.parent.refresh_from_db()
        self.assertFalse(Trip.objects.filter(id=self.child.id).exists())
        self.assertEqual(len(self.parent.trip_data), 2)
        main, sub = self.parent.trip_data
        self.assertEqual((main['origin'], main['destination'], main['price']), ('CityA', 'CityC', 150))
        self.assertEqual((sub['origin'], sub['destination'], sub['price']), ('CityA', 'CityB', 90))
        self.assertEqual(sub['tripId'], f'{self.parent.id}_1')
        self.assertEqual(sub['availableSeats'], 18)
        self.assertIsNone(self.parent.available_seats)
        self.assertFalse(self.parent.is_legacy_row)

        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.trip_details['recordId'], self.parent.id)
        self.assertEqual(self.reservation.trip_details['tripId'], f'{self.parent.id}_1')

        # folded segments now move independently
        AvailabilityService().adjust_availability(f'{self.parent.id}_1', 2)
        self.parent.refresh_from_db()
        self.assertEqual([s['availableSeats'] for s in self.parent.trip_data], [18, 20])

    def test_nothing_to_fold(self):
        Trip.objects.all().delete()
        out = StringIO()
        call_command('fold_legacy_trips', stdout=out)
        self.assertIn('No legacy trips', out.getvalue())
