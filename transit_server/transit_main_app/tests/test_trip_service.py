"""Tests for trip service"""

from django.test import TestCase
from django.contrib.auth.models import User
from ..models import Trip, Route, Vehicle, Profile
from ..services import TripService
from ..utils.constants import TripVisibility, UserRole
from ..utils.trip_expansion import SearchFilters, TripLookups
from .test_segments import sample_trip_data


class TripServiceTest(TestCase):
    def setUp(self):
        owner = User.objects.create_user('owner')
        Profile.objects.create(user=owner, role=UserRole.OWNER, company_id='c1', company='Transportes Norte',
                               profile_picture='norte.png')
        self.driver = User.objects.create_user('driver')
        Profile.objects.create(user=self.driver, role=UserRole.DRIVER, first_name='Juan', last_name='Soto',
                               phone='5551234', company_id='c1')
        self.vehicle = Vehicle.objects.create(plate_number='ABC-123', model='Irizar', capacity=40, company_id='c1')

        self.route = Route.objects.create(name='Norte', origin='CityA', destination='CityC', stops=['CityB'])
        self.trip = Trip.objects.create(route=self.route, company_id='c1', vehicle=self.vehicle, driver=self.driver,
                                        trip_data=sample_trip_data())
        self.draft = Trip.objects.create(route=self.route, company_id='c1', visibility=TripVisibility.DRAFT,
                                         trip_data=sample_trip_data())
        self.other_company = Trip.objects.create(route=self.route, company_id='c2', trip_data=sample_trip_data())
        self.service = TripService()

    def test_search_expanded(self):
        results = self.service.search_trips(SearchFilters(origin='CityB', company_id='c1'))

        self.assertEqual(len(results), 1)
        view = results[0]
        self.assertEqual(view['id'], f'{self.trip.id}_1')
        self.assertEqual(view['company_name'], 'Transportes Norte')
        self.assertEqual(view['company_logo'], 'norte.png')
        self.assertEqual(view['assigned_vehicle']['plate_number'], 'ABC-123')
        self.assertEqual(view['assigned_driver']['first_name'], 'Juan')
        self.assertEqual(view['route']['name'], 'Norte')

    def test_search_defaults_to_published(self):
        results = self.service.search_trips()
        self.assertEqual({r['record_id'] for r in results}, {self.trip.id, self.other_company.id})

    def test_search_optimized(self):
        results = self.service.search_trips(SearchFilters(optimized_response=True, include_all_visibilities=True))
        self.assertEqual([r['id'] for r in results], [self.trip.id, self.draft.id, self.other_company.id])

    def test_search_excludes_legacy_sub_trips(self):
        Trip.objects.create(route=self.route, company_id='c1', is_sub_trip=True, parent_trip=self.trip,
                            trip_data=sample_trip_data())
        results = self.service.search_trips(SearchFilters(company_id='c1'))
        self.assertEqual({r['record_id'] for r in results}, {self.trip.id})

    def test_search_uses_given_lookups(self):
        results = self.service.search_trips(SearchFilters(company_id='c2'), lookups=TripLookups())
        self.assertEqual(len(results), 2)
        self.assertIsNone(results[0]['company_name'])

    def test_get_segment_view(self):
        view = self.service.get_segment_view(f'{self.trip.id}_1')
        self.assertEqual(view['origin'], 'CityB')
        self.assertEqual(view['price'], 80)

    def test_get_segment_view_missing(self):
        self.assertIsNone(self.service.get_segment_view(f'{self.trip.id}_7'))
        self.assertIsNone(self.service.get_segment_view('bogus'))
        self.assertIsNone(self.service.get_segment_view(f'{self.draft.id}_0'))
        self.assertIsNotNone(self.service.get_segment_view(f'{self.draft.id}_0', include_all_visibilities=True))

    def test_publish_trip(self):
        trip = self.service.publish_trip(self.draft.id)
        self.assertEqual(trip.visibility, TripVisibility.PUBLISHED)

        with self.assertRaises(ValueError):
            self.service.publish_trip(self.trip.id)
