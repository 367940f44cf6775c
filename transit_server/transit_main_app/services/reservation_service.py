"""Reservation service - business logic for reservation operations"""
import logging

from django.db import transaction
from django.utils import timezone

from ..models import Trip, Route, Reservation, Passenger
from ..utils.constants import ReservationStatus
from ..utils.segments import split_business_id, compose_business_id
from ..utils.reservation_grouping import group_reservations, summarize_by_segment, parse_trip_details
from .availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class InsufficientSeatsError(Exception):
    """Raised when not enough seats available"""
    pass


class InvalidTripDetailsError(Exception):
    """Raised when trip_details does not point at an existing trip segment"""
    pass


class ReservationAlreadyCanceledError(Exception):
    """Raised when trying to cancel an already canceled reservation"""
    pass


def normalize_trip_details(trip_details, passenger_count=0):
    """
    Validate {recordId, tripId, seats} and fill defaults

    A bare row id in tripId is treated as the trip's first segment.
    """
    details = parse_trip_details(trip_details)
    try:
        record_id = int(details.get('recordId'))
    except (TypeError, ValueError):
        raise InvalidTripDetailsError('trip_details.recordId is required')

    trip_id = details.get('tripId')
    if trip_id in (None, ''):
        trip_id = compose_business_id(record_id, 0)
    trip_id = str(trip_id)
    parsed = split_business_id(trip_id)
    if parsed is None or parsed[0] != record_id:
        raise InvalidTripDetailsError(f'trip_details.tripId {trip_id!r} does not belong to trip {record_id}')

    try:
        seats = int(details.get('seats') or passenger_count or 1)
    except (TypeError, ValueError):
        raise InvalidTripDetailsError('trip_details.seats must be a number')
    if seats <= 0:
        raise InvalidTripDetailsError('trip_details.seats must be positive')

    return {**details, 'recordId': record_id, 'tripId': trip_id, 'seats': seats}


class ReservationService:
    """Service for reservation operations"""

    def __init__(self, availability=None):
        self.availability = availability or AvailabilityService()

    @transaction.atomic
    def create_reservation(self, trip_details, passengers=None, created_by=None, **fields):
        """
        Create reservation with atomic seat reduction

        Args:
            trip_details: {recordId, tripId, seats}
            passengers: list of {first_name, last_name} dicts
            created_by: User creating the reservation
            **fields: remaining Reservation columns (phone, email, total_amount...)

        Returns:
            Reservation object

        Raises:
            InvalidTripDetailsError: if trip_details is unusable
            InsufficientSeatsError: if the segment lacks seats
        """
        passengers = passengers or []
        details = normalize_trip_details(trip_details, len(passengers))

        trip = Trip.objects.select_for_update().filter(id=details['recordId']).first()
        if trip is None:
            raise InvalidTripDetailsError(f"Trip {details['recordId']} not found")

        if not self.availability.validate_seat_availability(trip.id, details['tripId'], details['seats']):
            raise InsufficientSeatsError(f"Not enough seats available on segment {details['tripId']}")

        fields.setdefault('company_id', trip.company_id)
        fields.setdefault('status', ReservationStatus.CONFIRMED)
        reservation = Reservation.objects.create(trip_details=details, created_by=created_by, **fields)

        Passenger.objects.bulk_create([
            Passenger(
                reservation=reservation,
                first_name=p.get('first_name') or p.get('firstName') or '',
                last_name=p.get('last_name') or p.get('lastName') or '',
            )
            for p in passengers
        ])

        self.availability.adjust_availability(details['tripId'], -details['seats'])
        logger.info(f"[RESERVATION] {reservation.code} created on {details['tripId']} for {details['seats']} seat(s)")
        return reservation

    def cancel_reservation(self, reservation_id, refund=False):
        """Cancel reservation and restore its seats"""
        with transaction.atomic():
            reservation = Reservation.objects.select_for_update().get(id=reservation_id)
            if reservation.is_canceled:
                raise ReservationAlreadyCanceledError("Reservation already canceled")

            reservation.status = ReservationStatus.CANCELED_AND_REFUND if refund else ReservationStatus.CANCELED
            reservation.save(update_fields=['status', 'updated_at'])

        details = parse_trip_details(reservation.trip_details)
        seats = details.get('seats') or reservation.passengers.count()
        target = details.get('tripId') or details.get('recordId')
        # the status change stands even when the trip is gone
        if not seats or not self.availability.adjust_availability(target, int(seats)):
            logger.warning(f"[RESERVATION] {reservation.code} canceled but seats were not restored on {target}")
        return reservation

    @transaction.atomic
    def check_in(self, reservation_id, user=None):
        """Register a ticket scan; the first scan stamps who and when"""
        reservation = Reservation.objects.select_for_update().get(id=reservation_id)
        first_scan = not reservation.is_checked

        reservation.check_count = (reservation.check_count or 0) + 1
        reservation.checked = True
        if first_scan:
            reservation.checked_by = user
            reservation.checked_at = timezone.now()
        reservation.save(update_fields=['check_count', 'checked', 'checked_by', 'checked_at', 'updated_at'])
        return reservation, first_scan

    def boarding_list(self, record_id):
        """Grouped reservations and per-segment totals for one trip"""
        trip = Trip.objects.select_related('route').filter(id=record_id).first()
        reservations = (
            Reservation.objects.filter(trip_details__recordId=record_id)
            .exclude(status__in=ReservationStatus.CANCELED_STATES)
            .prefetch_related('passengers')
        )
        trips_by_id = {trip.id: trip} if trip else {}
        routes_by_id = {trip.route_id: trip.route} if trip and trip.route_id else {}

        groups = group_reservations(reservations, trips_by_id, routes_by_id)
        return {
            'trip_id': record_id,
            'reservations': [group.to_dict() for group in groups],
            'segments': summarize_by_segment(groups),
            'total_passengers': sum(group.passenger_count for group in groups),
        }

    def grouped_reservations(self, reservations):
        """Group any reservation queryset, loading the referenced trips in bulk"""
        reservations = list(reservations)
        record_ids = set()
        for reservation in reservations:
            try:
                record_ids.add(int(parse_trip_details(reservation.trip_details).get('recordId')))
            except (TypeError, ValueError):
                continue
        trips_by_id = {trip.id: trip for trip in Trip.objects.filter(id__in=record_ids)}
        routes_by_id = {route.id: route for route in Route.objects.filter(id__in={t.route_id for t in trips_by_id.values() if t.route_id})}
        return group_reservations(reservations, trips_by_id, routes_by_id)
