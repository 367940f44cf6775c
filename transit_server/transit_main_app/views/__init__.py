"""Views package - HTTP request handlers"""

from .trip_views import TripSearchView, OperatorTripViewSet
from .route_views import RouteViewSet
from .reservation_views import ReservationViewSet, BoardingListView

__all__ = [
    'TripSearchView', 'OperatorTripViewSet',
    'RouteViewSet',
    'ReservationViewSet', 'BoardingListView',
]
