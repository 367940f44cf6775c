"""Services package - business logic layer"""

from .availability_service import AvailabilityService
from .trip_service import TripService
from .reservation_service import (
    ReservationService, InsufficientSeatsError, InvalidTripDetailsError, ReservationAlreadyCanceledError,
)

__all__ = [
    'AvailabilityService',
    'TripService',
    'ReservationService',
    'InsufficientSeatsError',
    'InvalidTripDetailsError',
    'ReservationAlreadyCanceledError',
]
