"""Trip expansion engine

Turns Trip rows (each holding an array of segments) into the flat records
the search and listing screens consume.

- expanded mode: one record per segment that passes every filter, keyed by
  the segment business id. A rider searching A → B must match the leg
  they would actually ride.
- optimized mode: one record per trip, the first segment standing in for
  the whole physical run.

Lookups (companies, vehicles, drivers) are passed in as prebuilt maps so
the engine itself never touches the database.
"""
import logging
from collections import namedtuple
from datetime import date, datetime

from .constants import TripVisibility, SearchMode, BusinessRules, UserRole
from .segments import parse_segments, compose_business_id, MalformedSegmentData

logger = logging.getLogger(__name__)

TripExpansion = namedtuple('TripExpansion', ['trip_id', 'views', 'skipped'])


def _to_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _to_int(value):
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_calendar_day(value):
    """Reduce a date, datetime or ISO string to its calendar day (no tz shift)"""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


class SearchFilters:
    """Filters accepted by trip search; empty values always match"""

    def __init__(self, origin=None, destination=None, date=None, date_range=None, seats=None,
                 company_id=None, company_ids=None, driver_id=None, visibility=None,
                 include_all_visibilities=False, optimized_response=False):
        self.origin = (origin or '').strip()
        self.destination = (destination or '').strip()
        self.date = date
        self.date_range = list(date_range or [])
        self.seats = seats
        self.company_id = company_id
        self.company_ids = [c for c in (company_ids or []) if c]
        self.driver_id = driver_id
        self.visibility = visibility
        self.include_all_visibilities = include_all_visibilities
        self.optimized_response = optimized_response

    @classmethod
    def from_query_params(cls, params):
        """Build filters from request query params (camelCase, as sent by the web client)"""
        date_range = params.get('dateRange') or ''
        company_ids = params.get('companyIds') or ''
        return cls(
            origin=params.get('origin'),
            destination=params.get('destination'),
            date=params.get('date'),
            date_range=[d.strip() for d in date_range.split(',') if d.strip()],
            seats=_to_int(params.get('seats')),
            company_id=params.get('companyId'),
            company_ids=[c.strip() for c in company_ids.split(',') if c.strip()],
            driver_id=_to_int(params.get('driverId')),
            visibility=params.get('visibility'),
            include_all_visibilities=_to_bool(params.get('includeAllVisibilities')),
            optimized_response=_to_bool(params.get('optimizedResponse')),
        )

    @property
    def mode(self):
        return SearchMode.OPTIMIZED if self.optimized_response else SearchMode.EXPANDED

    @property
    def days(self):
        """Requested calendar days; a date range wins over a single date"""
        values = self.date_range or ([self.date] if self.date else [])
        return {day for day in (to_calendar_day(v) for v in values) if day}

    @property
    def has_date_filter(self):
        return bool(self.date_range or self.date)

    @property
    def visibility_filter(self):
        """Visibility to require, or None when every visibility is allowed"""
        if self.include_all_visibilities:
            return None
        return self.visibility or TripVisibility.PUBLISHED

    @property
    def company_filter(self):
        """Set of company ids to require, or None for no company restriction"""
        if self.company_ids:
            return set(self.company_ids)
        if self.company_id and self.company_id != BusinessRules.ALL_COMPANIES:
            return {self.company_id}
        return None


class TripLookups:
    """Id → record maps used to denormalize search results"""

    def __init__(self, companies=None, vehicles=None, drivers=None):
        self.companies = companies or {}
        self.vehicles = vehicles or {}
        self.drivers = drivers or {}

    @classmethod
    def build(cls):
        """Load every lookup with one query per table"""
        from ..models import Profile, Vehicle

        companies = {}
        for owner in Profile.objects.filter(role=UserRole.OWNER):
            key = owner.company_key
            if key:
                companies[key] = {'name': owner.company, 'logo': owner.profile_picture}

        vehicles = {vehicle.id: vehicle for vehicle in Vehicle.objects.all()}
        drivers = {
            profile.user_id: profile
            for profile in Profile.objects.filter(role=UserRole.DRIVER)
        }
        logger.debug(f"[SEARCH] Lookups: {len(companies)} companies, {len(vehicles)} vehicles, {len(drivers)} drivers")
        return cls(companies=companies, vehicles=vehicles, drivers=drivers)

    def company(self, company_id):
        return self.companies.get(company_id) if company_id else None

    def vehicle(self, vehicle_id):
        return self.vehicles.get(vehicle_id) if vehicle_id else None

    def driver(self, driver_id):
        return self.drivers.get(driver_id) if driver_id else None


def _contains(haystack, needle):
    if not needle:
        return True
    return needle.lower() in (haystack or '').lower()


def segment_matches(segment, filters):
    """A segment passes when it satisfies every supplied per-segment filter"""
    if not _contains(segment.origin, filters.origin):
        return False
    if not _contains(segment.destination, filters.destination):
        return False
    if filters.has_date_filter and to_calendar_day(segment.departure_date) not in filters.days:
        return False
    if filters.seats and (segment.available_seats or 0) < filters.seats:
        return False
    return True


def trip_matches(trip, filters):
    """Trip-level filters shared by both modes: visibility, company, driver"""
    visibility = filters.visibility_filter
    if visibility and trip.visibility != visibility:
        return False
    companies = filters.company_filter
    if companies is not None and trip.company_id not in companies:
        return False
    if filters.driver_id and trip.driver_id != filters.driver_id:
        return False
    return True


def route_summary(route):
    if route is None:
        return None
    return {
        'id': route.id,
        'name': route.name,
        'origin': route.origin,
        'destination': route.destination,
        'stops': route.stops,
        'company_id': route.company_id,
    }


def vehicle_summary(vehicle, compact=False):
    if vehicle is None:
        return None
    summary = {'id': vehicle.id, 'model': vehicle.model, 'plate_number': vehicle.plate_number}
    if not compact:
        summary.update({
            'brand': vehicle.brand,
            'economic_number': vehicle.economic_number,
            'capacity': vehicle.capacity,
            'has_ac': vehicle.has_ac,
        })
    return summary


def driver_summary(profile, compact=False):
    if profile is None:
        return None
    summary = {'id': profile.user_id, 'first_name': profile.first_name, 'last_name': profile.last_name}
    if not compact:
        summary['phone'] = profile.phone
    return summary


def _base_view(trip, route, lookups, compact):
    company = lookups.company(trip.company_id) or {}
    view = {
        'route_id': trip.route_id,
        'route': route_summary(route),
        'num_stops': len(route.stops or []) if route else 0,
        'company_id': trip.company_id,
        'company_name': company.get('name'),
        'visibility': trip.visibility,
        'capacity': trip.capacity,
        'vehicle_id': trip.vehicle_id,
        'driver_id': trip.driver_id,
        'assigned_vehicle': vehicle_summary(lookups.vehicle(trip.vehicle_id), compact=compact),
        'assigned_driver': driver_summary(lookups.driver(trip.driver_id), compact=compact),
    }
    if not compact:
        view['company_logo'] = company.get('logo')
    return view


def expanded_views(trip, segments, route, filters, lookups):
    views = []
    for index, segment in enumerate(segments):
        if not segment_matches(segment, filters):
            continue
        view = _base_view(trip, route, lookups, compact=False)
        view.update({
            'id': compose_business_id(trip.id, index),
            'record_id': trip.id,
            'segment_index': index,
            'trip_id': segment.trip_id,
            'is_main_trip': segment.is_main_trip,
            'origin': segment.origin,
            'destination': segment.destination,
            'departure_date': segment.departure_date,
            'departure_time': segment.departure_time,
            'arrival_time': segment.arrival_time,
            'price': segment.price,
            'available_seats': segment.available_seats,
        })
        views.append(view)
    return views


def optimized_view(trip, segments, route, filters, lookups):
    if not segments:
        return None
    if filters.has_date_filter:
        days = filters.days
        if not any(to_calendar_day(s.departure_date) in days for s in segments):
            return None

    first, last = segments[0], segments[-1]
    view = _base_view(trip, route, lookups, compact=True)
    view.update({
        'id': trip.id,
        'record_id': trip.id,
        'origin': route.origin if route else first.origin,
        'destination': route.destination if route else first.destination,
        'departure_date': first.departure_date,
        'departure_time': first.departure_time,
        'arrival_time': last.arrival_time or first.arrival_time,
        'price': first.price,
        'available_seats': first.available_seats,
        'segment_count': len(segments),
    })
    return view


def expand_trip(trip, route, filters, mode, lookups):
    """
    Expand a single trip; never raises for bad data

    Returns:
        TripExpansion(trip_id, views, skipped) where skipped carries the
        reason the trip produced nothing because of its own data, or None
    """
    try:
        segments = parse_segments(trip.trip_data)
    except MalformedSegmentData as e:
        logger.warning(f"[SEARCH] Skipping trip {trip.id}: {e}")
        return TripExpansion(trip.id, [], str(e))

    if not trip_matches(trip, filters):
        return TripExpansion(trip.id, [], None)

    if mode == SearchMode.OPTIMIZED:
        view = optimized_view(trip, segments, route, filters, lookups)
        return TripExpansion(trip.id, [view] if view else [], None)
    return TripExpansion(trip.id, expanded_views(trip, segments, route, filters, lookups), None)


def expand_trips(trips, routes_by_id, filters, mode=SearchMode.EXPANDED, lookups=None):
    """Expand every trip, one TripExpansion per input trip"""
    lookups = lookups or TripLookups()
    return [
        expand_trip(trip, routes_by_id.get(trip.route_id), filters, mode, lookups)
        for trip in trips
    ]


def search(trips, routes_by_id, filters, mode=SearchMode.EXPANDED, lookups=None):
    """Flatten the expansion of every trip into the list of trip views"""
    results = []
    skipped = 0
    for expansion in expand_trips(trips, routes_by_id, filters, mode, lookups):
        results.extend(expansion.views)
        if expansion.skipped:
            skipped += 1
    if skipped:
        logger.info(f"[SEARCH] {skipped} trip(s) skipped for unreadable segment data")
    return results
