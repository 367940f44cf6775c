"""Serializers package - imports from domain-specific modules"""

# Route serializers
from .route_serializers import RouteSerializer

# Trip serializers
from .trip_serializers import (
    SegmentSerializer,
    TripSerializer,
)

# Reservation serializers
from .reservation_serializers import (
    PassengerSerializer,
    TripDetailsSerializer,
    ReservationSerializer,
    ReservationCreateSerializer,
)

__all__ = [
    'RouteSerializer',
    'SegmentSerializer',
    'TripSerializer',
    'PassengerSerializer',
    'TripDetailsSerializer',
    'ReservationSerializer',
    'ReservationCreateSerializer',
]
