"""Trip service - business logic for trip search and listings"""
import logging

from django.db import transaction

from ..models import Trip, Route
from ..utils.constants import TripVisibility
from ..utils.segments import resolve_segment, compose_business_id, split_business_id
from ..utils.trip_expansion import SearchFilters, TripLookups, search, expanded_views

logger = logging.getLogger(__name__)


class TripService:
    """Service for trip operations"""

    def get_trip_queryset(self, filters):
        """Trip-level filters the database can apply before segment expansion"""
        trips = Trip.objects.all()

        visibility = filters.visibility_filter
        if visibility:
            trips = trips.filter(visibility=visibility)

        companies = filters.company_filter
        if companies is not None:
            trips = trips.filter(company_id__in=companies)

        if filters.driver_id:
            trips = trips.filter(driver_id=filters.driver_id)

        # legacy sub-trip rows are reachable through their parent's segments only
        return trips.filter(is_sub_trip=False).order_by('id')

    def search_trips(self, filters=None, lookups=None):
        """
        Search trips and return flattened trip views

        Args:
            filters: SearchFilters (defaults to published trips, no filters)
            lookups: prebuilt TripLookups, loaded from the database when omitted

        Returns:
            list of dict views (one per segment, or one per trip when
            filters.optimized_response is set)
        """
        filters = filters or SearchFilters()
        trips = list(self.get_trip_queryset(filters))
        routes_by_id = {route.id: route for route in Route.objects.filter(id__in={t.route_id for t in trips if t.route_id})}
        lookups = lookups or TripLookups.build()

        results = search(trips, routes_by_id, filters, filters.mode, lookups)
        logger.info(f"[SEARCH] {filters.mode} search: {len(trips)} trips → {len(results)} results")
        return results

    def get_segment_view(self, business_trip_id, include_all_visibilities=False, lookups=None):
        """Single expanded view for "<row id>_<index>", or None"""
        parsed = split_business_id(business_trip_id)
        if parsed is None:
            return None
        record_id, index = parsed

        trip = Trip.objects.select_related('route').filter(id=record_id).first()
        if trip is None:
            return None
        if not include_all_visibilities and trip.visibility != TripVisibility.PUBLISHED:
            return None
        resolved = resolve_segment(trip, business_trip_id)
        if resolved is None:
            return None

        lookups = lookups or TripLookups.build()
        views = expanded_views(trip, [resolved.segment], trip.route, SearchFilters(), lookups)
        view = views[0]
        view['id'] = compose_business_id(trip.id, index)
        view['segment_index'] = index
        return view

    @transaction.atomic
    def publish_trip(self, trip_id):
        """Publish a draft trip"""
        trip = Trip.objects.select_for_update().get(id=trip_id)

        if trip.visibility != TripVisibility.DRAFT:
            raise ValueError('Only draft trips can be published')
        if not trip.trip_data:
            raise ValueError('Trips without segments cannot be published')

        trip.visibility = TripVisibility.PUBLISHED
        trip.save(update_fields=['visibility', 'updated_at'])
        return trip
