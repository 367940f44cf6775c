"""Tests for the trip expansion engine"""

from datetime import date

from django.test import SimpleTestCase
from ..models import Trip, Route, Vehicle
from ..utils.constants import SearchMode, TripVisibility
from ..utils.trip_expansion import (
    SearchFilters, TripLookups, search, expand_trip, expand_trips, segment_matches, to_calendar_day,
)
from ..utils.segments import parse_segments
from .test_segments import sample_trip_data


def three_leg_trip(trip_id=7, company_id='c1'):
    return Trip(id=trip_id, company_id=company_id, visibility=TripVisibility.PUBLISHED, trip_data=[
        {'origin': 'Tijuana', 'destination': 'Ensenada', 'departureDate': '2025-06-01', 'price': 300,
         'availableSeats': 5, 'tripId': f'{trip_id}_0', 'isMainTrip': True},
        {'origin': 'Tijuana', 'destination': 'Rosarito', 'departureDate': '2025-06-01', 'price': 100,
         'availableSeats': 1, 'tripId': f'{trip_id}_1'},
        {'origin': 'Rosarito', 'destination': 'Ensenada', 'departureDate': '2025-06-02', 'price': 200,
         'availableSeats': 0, 'tripId': f'{trip_id}_2'},
    ])


class SearchExampleTest(SimpleTestCase):
    def setUp(self):
        self.trip = Trip(id=42, company_id='c1', visibility=TripVisibility.PUBLISHED, trip_data=sample_trip_data())

    def test_expanded_search_matches_sub_leg(self):
        filters = SearchFilters(origin='CityB', destination='CityC', date='2025-05-28')
        results = search([self.trip], {}, filters, SearchMode.EXPANDED)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]['id'], '42_1')
        self.assertEqual(results[0]['price'], 80)
        self.assertEqual(results[0]['record_id'], 42)

    def test_optimized_search_uses_first_segment(self):
        results = search([self.trip], {}, SearchFilters(), SearchMode.OPTIMIZED)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]['id'], 42)
        self.assertEqual(results[0]['price'], 100)
        self.assertEqual(results[0]['arrival_time'], '12:00')
        self.assertEqual(results[0]['segment_count'], 2)

    def test_optimized_search_prefers_route_endpoints(self):
        route = Route(id=3, name='Norte', origin='CityA', destination='CityC', stops=['CityB'])
        self.trip.route_id = 3
        results = search([self.trip], {3: route}, SearchFilters(optimized_response=True), SearchMode.OPTIMIZED)

        self.assertEqual(results[0]['origin'], 'CityA')
        self.assertEqual(results[0]['destination'], 'CityC')
        self.assertEqual(results[0]['num_stops'], 1)


class ExpansionCardinalityTest(SimpleTestCase):
    def test_no_filters_yields_every_segment(self):
        results = search([three_leg_trip(), three_leg_trip(8)], {}, SearchFilters())
        self.assertEqual(len(results), 6)
        self.assertEqual([r['id'] for r in results[:3]], ['7_0', '7_1', '7_2'])

    def test_business_ids_are_unique(self):
        results = search([three_leg_trip(), three_leg_trip(8)], {}, SearchFilters())
        ids = [r['id'] for r in results]
        self.assertEqual(len(ids), len(set(ids)))

    def test_optimized_yields_at_most_one_per_trip(self):
        results = search([three_leg_trip(), three_leg_trip(8)], {}, SearchFilters(), SearchMode.OPTIMIZED)
        self.assertEqual([r['id'] for r in results], [7, 8])

    def test_empty_trip_data_yields_nothing(self):
        trip = Trip(id=9, visibility=TripVisibility.PUBLISHED, trip_data=[])
        self.assertEqual(search([trip], {}, SearchFilters()), [])
        self.assertEqual(search([trip], {}, SearchFilters(), SearchMode.OPTIMIZED), [])


class FilterConjunctionTest(SimpleTestCase):
    def setUp(self):
        self.segments = parse_segments(three_leg_trip().trip_data)

    def test_substring_match_is_case_insensitive(self):
        filters = SearchFilters(origin='tiju', destination='ROSA')
        self.assertEqual([segment_matches(s, filters) for s in self.segments], [False, True, False])

    def test_seats_filter(self):
        filters = SearchFilters(seats=2)
        self.assertEqual([segment_matches(s, filters) for s in self.segments], [True, False, False])

    def test_date_range_wins_over_date(self):
        filters = SearchFilters(date='2025-06-01', date_range=['2025-06-02'])
        self.assertEqual([segment_matches(s, filters) for s in self.segments], [False, False, True])

    def test_every_filter_must_hold(self):
        filters = SearchFilters(origin='Tijuana', date='2025-06-01', seats=2)
        results = search([three_leg_trip()], {}, filters)
        self.assertEqual([r['id'] for r in results], ['7_0'])

    def test_visibility_defaults_to_published(self):
        draft = three_leg_trip()
        draft.visibility = TripVisibility.DRAFT
        self.assertEqual(search([draft], {}, SearchFilters()), [])
        self.assertEqual(len(search([draft], {}, SearchFilters(include_all_visibilities=True))), 3)
        self.assertEqual(len(search([draft], {}, SearchFilters(visibility=TripVisibility.DRAFT))), 3)

    def test_company_filter(self):
        trips = [three_leg_trip(7, 'c1'), three_leg_trip(8, 'c2')]
        self.assertEqual({r['record_id'] for r in search(trips, {}, SearchFilters(company_id='c2'))}, {8})
        self.assertEqual({r['record_id'] for r in search(trips, {}, SearchFilters(company_id='ALL'))}, {7, 8})
        self.assertEqual({r['record_id'] for r in search(trips, {}, SearchFilters(company_ids=['c1', 'c2']))}, {7, 8})

    def test_driver_filter(self):
        trip = three_leg_trip()
        trip.driver_id = 5
        self.assertEqual(search([trip], {}, SearchFilters(driver_id=6)), [])
        self.assertEqual(len(search([trip], {}, SearchFilters(driver_id=5))), 3)

    def test_optimized_date_filter_matches_any_segment(self):
        results = search([three_leg_trip()], {}, SearchFilters(date='2025-06-02'), SearchMode.OPTIMIZED)
        self.assertEqual(len(results), 1)
        results = search([three_leg_trip()], {}, SearchFilters(date='2025-06-03'), SearchMode.OPTIMIZED)
        self.assertEqual(results, [])


class MalformedTripTest(SimpleTestCase):
    def test_malformed_trip_is_skipped_not_fatal(self):
        broken = Trip(id=1, visibility=TripVisibility.PUBLISHED, trip_data='not json')
        expansions = expand_trips([broken, three_leg_trip()], {}, SearchFilters())

        self.assertEqual(expansions[0].views, [])
        self.assertIsNotNone(expansions[0].skipped)
        self.assertEqual(len(expansions[1].views), 3)
        self.assertEqual(len(search([broken, three_leg_trip()], {}, SearchFilters())), 3)

    def test_filtered_out_trip_is_not_marked_skipped(self):
        draft = three_leg_trip()
        draft.visibility = TripVisibility.HIDDEN
        expansion = expand_trip(draft, None, SearchFilters(), SearchMode.EXPANDED, TripLookups())
        self.assertEqual(expansion.views, [])
        self.assertIsNone(expansion.skipped)


class LookupsTest(SimpleTestCase):
    def test_views_are_denormalized(self):
        trip = three_leg_trip()
        trip.vehicle_id = 11
        vehicle = Vehicle(id=11, plate_number='ABC-123', model='Irizar', brand='Volvo', capacity=40)
        lookups = TripLookups(companies={'c1': {'name': 'Transportes Norte', 'logo': 'logo.png'}}, vehicles={11: vehicle})

        expanded = search([trip], {}, SearchFilters(), SearchMode.EXPANDED, lookups)[0]
        self.assertEqual(expanded['company_name'], 'Transportes Norte')
        self.assertEqual(expanded['company_logo'], 'logo.png')
        self.assertEqual(expanded['assigned_vehicle']['brand'], 'Volvo')
        self.assertIsNone(expanded['assigned_driver'])

        optimized = search([trip], {}, SearchFilters(), SearchMode.OPTIMIZED, lookups)[0]
        self.assertNotIn('company_logo', optimized)
        self.assertNotIn('brand', optimized['assigned_vehicle'])


class SearchFiltersTest(SimpleTestCase):
    def test_from_query_params(self):
        filters = SearchFilters.from_query_params({
            'origin': ' CityA ', 'dateRange': '2025-06-01, 2025-06-02', 'seats': '3',
            'companyIds': 'c1,c2', 'optimizedResponse': 'true', 'driverId': 'x',
        })
        self.assertEqual(filters.origin, 'CityA')
        self.assertEqual(filters.days, {date(2025, 6, 1), date(2025, 6, 2)})
        self.assertEqual(filters.seats, 3)
        self.assertEqual(filters.company_filter, {'c1', 'c2'})
        self.assertEqual(filters.mode, SearchMode.OPTIMIZED)
        self.assertIsNone(filters.driver_id)

    def test_to_calendar_day(self):
        self.assertEqual(to_calendar_day('2025-05-28T23:30:00Z'), date(2025, 5, 28))
        self.assertIsNone(to_calendar_day('soon'))
        self.assertIsNone(to_calendar_day(''))
