"""Group reservations by the trip segment they were sold on (boarding lists)"""
import json
import logging
from dataclasses import dataclass, field

from ..models.reservation import reservation_is_checked
from .constants import BusinessRules
from .segments import (
    resolve_segment, main_segment_index, parse_segments, compose_business_id, MalformedSegmentData,
)

logger = logging.getLogger(__name__)


@dataclass
class GroupedReservation:
    id: int
    code: str
    trip_id: str
    record_id: int = None
    segment_index: int = None
    trip_segment: str = ''
    origin: str = None
    destination: str = None
    is_main_trip: bool = False
    degraded: bool = False
    email: str = ''
    phone: str = ''
    notes: str = ''
    status: str = ''
    payment_method: str = ''
    payment_status: str = ''
    amount: float = 0
    advance_amount: float = 0
    checked: bool = False
    check_count: int = 0
    checked_by_id: int = None
    checked_at: object = None
    passengers: list = field(default_factory=list)

    @property
    def passenger_count(self):
        return len(self.passengers)

    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'trip_id': self.trip_id,
            'record_id': self.record_id,
            'segment_index': self.segment_index,
            'trip_segment': self.trip_segment,
            'origin': self.origin,
            'destination': self.destination,
            'is_main_trip': self.is_main_trip,
            'degraded': self.degraded,
            'email': self.email,
            'phone': self.phone,
            'notes': self.notes,
            'status': self.status,
            'payment_method': self.payment_method,
            'payment_status': self.payment_status,
            'amount': float(self.amount or 0),
            'advance_amount': float(self.advance_amount or 0),
            'checked': self.checked,
            'check_count': self.check_count,
            'checked_by': self.checked_by_id,
            'checked_at': self.checked_at,
            'passenger_count': self.passenger_count,
            'passengers': self.passengers,
        }


def parse_trip_details(raw):
    """Return the trip_details dict of a reservation, or {} if unreadable"""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return {}
    return raw if isinstance(raw, dict) else {}


def _record_id(details):
    try:
        return int(details.get('recordId'))
    except (TypeError, ValueError):
        return None


def _passenger_entry(passenger):
    """Normalize a Passenger row or a raw passenger dict; None if unusable"""
    if isinstance(passenger, dict):
        passenger_id = passenger.get('id')
        first_name = passenger.get('first_name') or passenger.get('firstName')
        last_name = passenger.get('last_name') or passenger.get('lastName')
    elif hasattr(passenger, 'first_name'):
        passenger_id = passenger.id
        first_name = passenger.first_name
        last_name = passenger.last_name
    else:
        return None

    initials = f"{first_name[0]}{last_name[0]}".upper() if first_name and last_name else 'XX'
    return {
        'id': passenger_id or 0,
        'first_name': first_name or BusinessRules.UNKNOWN_FIRST_NAME,
        'last_name': last_name or BusinessRules.UNKNOWN_LAST_NAME,
        'initials': initials,
    }


def _passengers_for(reservation, passengers_by_reservation):
    if passengers_by_reservation is not None:
        passengers = passengers_by_reservation.get(reservation.id)
    elif reservation.pk:
        passengers = list(reservation.passengers.all())
    else:
        passengers = None
    if not isinstance(passengers, (list, tuple)):
        return []
    entries = (_passenger_entry(p) for p in passengers)
    return [entry for entry in entries if entry is not None]


def _segment_label(trip, route, resolved, segments):
    """Sub-legs are labelled with their own endpoints, the main leg with the route's"""
    segment = resolved.segment
    is_main = resolved.index == main_segment_index(segments)
    if is_main and route is not None:
        origin, destination = route.origin, route.destination
    else:
        origin, destination = segment.origin, segment.destination
    return origin, destination, is_main


def _segment_lookup_id(trip, record_id, business_id):
    """A bare row id in tripId stands for the trip's main leg"""
    if not business_id or not business_id.isdigit() or int(business_id) != record_id:
        return business_id
    try:
        segments = parse_segments(trip)
    except MalformedSegmentData:
        return business_id
    return compose_business_id(record_id, main_segment_index(segments))


def build_group(reservation, trips_by_id, routes_by_id=None, passengers_by_reservation=None):
    details = parse_trip_details(reservation.trip_details)
    record_id = _record_id(details)
    business_id = details.get('tripId') or record_id
    business_id = str(business_id) if business_id else None

    group = GroupedReservation(
        id=reservation.id,
        code=reservation.code,
        trip_id=business_id,
        record_id=record_id,
        email=reservation.email or '',
        phone=reservation.phone or '',
        notes=reservation.notes or '',
        status=reservation.status,
        payment_method=reservation.payment_method or 'unknown',
        payment_status=reservation.payment_status,
        amount=reservation.total_amount or 0,
        advance_amount=reservation.advance_amount or 0,
        checked=reservation_is_checked(reservation),
        check_count=reservation.check_count or 0,
        checked_by_id=reservation.checked_by_id,
        checked_at=reservation.checked_at,
        passengers=_passengers_for(reservation, passengers_by_reservation),
    )

    trip = trips_by_id.get(record_id) if record_id is not None else None
    resolved = resolve_segment(trip, _segment_lookup_id(trip, record_id, business_id)) if trip is not None else None
    if resolved is None:
        logger.warning(f"[BOARDING] Reservation {reservation.id}: trip/segment {business_id} not found, showing degraded entry")
        group.degraded = True
        group.trip_segment = BusinessRules.RELATED_TRIP_LABEL.format(business_id or '?')
        return group

    if routes_by_id is not None:
        route = routes_by_id.get(trip.route_id)
    else:
        route = trip.route if trip.route_id else None

    try:
        segments = parse_segments(trip)
    except MalformedSegmentData:
        segments = []
    origin, destination, is_main = _segment_label(trip, route, resolved, segments)

    group.trip_id = compose_business_id(record_id, resolved.index)
    group.segment_index = resolved.index
    group.is_main_trip = is_main
    group.origin = origin
    group.destination = destination
    group.trip_segment = f"{origin} → {destination}"
    return group


def partition_unchecked_first(groups):
    """Stable partition: unchecked reservations first, input order kept within each half"""
    return [g for g in groups if not g.checked] + [g for g in groups if g.checked]


def group_reservations(reservations, trips_by_id, routes_by_id=None, passengers_by_reservation=None):
    """
    Build one GroupedReservation per reservation id

    Args:
        reservations: iterable of Reservation rows
        trips_by_id: {trip row id: Trip}
        routes_by_id: optional {route id: Route}; falls back to trip.route
        passengers_by_reservation: optional {reservation id: [Passenger]};
            falls back to reservation.passengers.all()

    Returns:
        list of GroupedReservation, unchecked first. No reservation is
        ever dropped: a missing trip/segment yields a degraded entry.
    """
    groups = {}
    for reservation in reservations:
        # the same row can arrive twice when callers union querysets
        if reservation.id in groups:
            continue
        groups[reservation.id] = build_group(reservation, trips_by_id, routes_by_id, passengers_by_reservation)

    result = partition_unchecked_first(list(groups.values()))
    logger.debug(f"[BOARDING] {len(result)} reservations, {sum(g.passenger_count for g in result)} passengers")
    return result


def summarize_by_segment(groups):
    """Passenger totals per trip segment, in order of first appearance"""
    summary = {}
    for group in groups:
        entry = summary.setdefault(group.trip_id, {
            'trip_id': group.trip_id,
            'trip_segment': group.trip_segment,
            'reservations': 0,
            'passengers': 0,
            'checked_passengers': 0,
        })
        entry['reservations'] += 1
        entry['passengers'] += group.passenger_count
        if group.checked:
            entry['checked_passengers'] += group.passenger_count
    return list(summary.values())
