"""Tests for availability service"""

from django.test import TestCase
from ..models import Trip, Route
from ..services import AvailabilityService
from ..utils.constants import TripVisibility
from .test_segments import sample_trip_data


def seats_of(trip):
    trip.refresh_from_db()
    return [segment['availableSeats'] for segment in trip.trip_data]


class AvailabilityServiceTest(TestCase):
    def setUp(self):
        self.service = AvailabilityService()
        self.route = Route.objects.create(name='Norte', origin='CityA', destination='CityC', stops=['CityB'])
        self.trip = Trip.objects.create(route=self.route, company_id='c1', capacity=10,
                                        visibility=TripVisibility.PUBLISHED, trip_data=sample_trip_data())

    def test_adjust_only_touches_referenced_segment(self):
        result = self.service.adjust_availability(f'{self.trip.id}_1', -2)
        self.assertTrue(result)
        self.assertEqual(seats_of(self.trip), [10, 8])

    def test_reserve_then_cancel_restores_seats(self):
        business_id = f'{self.trip.id}_0'
        self.service.adjust_availability(business_id, -3)
        self.service.adjust_availability(business_id, 3)
        self.assertEqual(seats_of(self.trip), [10, 10])

    def test_bare_row_id_targets_main_segment(self):
        data = sample_trip_data()
        data[0]['isMainTrip'] = False
        data[1]['isMainTrip'] = True
        self.trip.trip_data = data
        self.trip.save()

        self.assertTrue(self.service.adjust_availability(self.trip.id, -1))
        self.assertEqual(seats_of(self.trip), [10, 9])

    def test_seats_are_clamped(self):
        self.service.adjust_availability(f'{self.trip.id}_0', -50)
        self.service.adjust_availability(f'{self.trip.id}_1', 50)
        self.assertEqual(seats_of(self.trip), [0, 10])

    def test_over_release_is_clamped_at_capacity(self):
        business_id = f'{self.trip.id}_1'
        self.service.adjust_availability(business_id, -15)
        self.service.adjust_availability(business_id, 15)
        self.assertEqual(seats_of(self.trip), [10, 10])

    def test_trip_without_segments_is_a_logged_no_op(self):
        empty = Trip.objects.create(route=self.route, company_id='c1', capacity=10, trip_data=[])
        with self.assertLogs('transit_main_app.services.availability_service', level='WARNING'):
            self.assertFalse(self.service.adjust_availability(empty.id, -2))
        empty.refresh_from_db()
        self.assertEqual(empty.trip_data, [])
        self.assertIsNone(empty.available_seats)
        self.assertFalse(self.service.validate_seat_availability(empty.id, f'{empty.id}_0', 1))

    def test_unknown_trip_is_a_logged_no_op(self):
        with self.assertLogs('transit_main_app.services.availability_service', level='WARNING'):
            self.assertFalse(self.service.adjust_availability('999999_0', -1))
        self.assertEqual(seats_of(self.trip), [10, 10])

    def test_out_of_range_segment_is_a_no_op(self):
        self.assertFalse(self.service.adjust_availability(f'{self.trip.id}_9', -1))
        self.assertEqual(seats_of(self.trip), [10, 10])

    def test_unrecognized_id(self):
        self.assertFalse(self.service.adjust_availability('abc', -1))

    def test_zero_delta(self):
        self.assertTrue(self.service.adjust_availability(f'{self.trip.id}_0', 0))
        self.assertEqual(seats_of(self.trip), [10, 10])

    def test_validate_seat_availability(self):
        business_id = f'{self.trip.id}_1'
        self.assertTrue(self.service.validate_seat_availability(self.trip.id, business_id, 10))
        self.assertFalse(self.service.validate_seat_availability(self.trip.id, business_id, 11))
        self.assertFalse(self.service.validate_seat_availability(self.trip.id, business_id, 0))
        self.assertFalse(self.service.validate_seat_availability(self.trip.id, f'{self.trip.id}_5', 1))
        self.assertFalse(self.service.validate_seat_availability(999999, '999999_0', 1))


class LegacyAvailabilityTest(TestCase):
    def setUp(self):
        self.service = AvailabilityService()
        self.parent = Trip.objects.create(company_id='c1', capacity=20, available_seats=20, trip_data=[])
        self.children = [
            Trip.objects.create(company_id='c1', capacity=20, available_seats=20, trip_data=[],
                                is_sub_trip=True, parent_trip=self.parent,
                                segment_origin='CityA', segment_destination='CityB'),
            Trip.objects.create(company_id='c1', capacity=20, available_seats=20, trip_data=[],
                                is_sub_trip=True, parent_trip=self.parent,
                                segment_origin='CityB', segment_destination='CityC'),
        ]

    def _seats(self):
        rows = Trip.objects.filter(id__in=[self.parent.id] + [c.id for c in self.children]).order_by('id')
        return [row.available_seats for row in rows]

    def test_parent_and_siblings_move_together(self):
        self.assertTrue(self.service.adjust_availability(self.children[0].id, -3))
        self.assertEqual(self._seats(), [17, 17, 17])

    def test_adjusting_parent_updates_children(self):
        self.service.adjust_availability(self.parent.id, -2)
        self.service.adjust_availability(self.parent.id, 2)
        self.assertEqual(self._seats(), [20, 20, 20])

    def test_validate_legacy_row(self):
        self.assertTrue(self.service.validate_seat_availability(self.parent.id, f'{self.parent.id}_0', 20))
        self.assertFalse(self.service.validate_seat_availability(self.parent.id, f'{self.parent.id}_0', 21))
