"""Segment codec for the JSON array stored in Trip.trip_data

Each element of trip_data is one sellable leg of a physical run:

    {"origin": "CityA", "destination": "CityB", "departureDate": "2025-05-28",
     "departureTime": "08:00", "arrivalTime": "10:00", "price": 100,
     "availableSeats": 10, "tripId": "42_0", "isMainTrip": true}

Segments are addressed from outside by a business id "<trip row id>_<index>".
"""
import json
import logging
from collections import namedtuple
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

BUSINESS_ID_SEPARATOR = '_'

ResolvedSegment = namedtuple('ResolvedSegment', ['segment', 'index'])


class MalformedSegmentData(Exception):
    """Raised when trip_data cannot be read as an array of segment objects"""
    pass


# python attribute -> stored JSON key
FIELD_MAP = {
    'origin': 'origin',
    'destination': 'destination',
    'departure_date': 'departureDate',
    'departure_time': 'departureTime',
    'arrival_time': 'arrivalTime',
    'price': 'price',
    'available_seats': 'availableSeats',
    'trip_id': 'tripId',
    'is_main_trip': 'isMainTrip',
}


@dataclass
class Segment:
    origin: str = ''
    destination: str = ''
    departure_date: str = ''
    departure_time: str = ''
    arrival_time: str = ''
    price: float = 0
    available_seats: int = None
    trip_id: str = ''
    is_main_trip: bool = False
    # keys we don't model are written back untouched
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise MalformedSegmentData(f"Segment must be an object, got {type(data).__name__}")
        values = {}
        for attr, key in FIELD_MAP.items():
            if key in data:
                values[attr] = data[key]
        if 'available_seats' in values:
            values['available_seats'] = _as_int(values['available_seats'])
        if 'is_main_trip' in values:
            values['is_main_trip'] = bool(values['is_main_trip'])
        known = set(FIELD_MAP.values())
        values['extra'] = {k: v for k, v in data.items() if k not in known}
        return cls(**values)

    def to_dict(self):
        data = dict(self.extra)
        for attr, key in FIELD_MAP.items():
            data[key] = getattr(self, attr)
        return data

    def with_seats(self, available_seats):
        return replace(self, available_seats=available_seats)


def _as_int(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_segments(raw):
    """
    Parse trip_data into a list of Segment records

    Args:
        raw: a list of segment dicts, a JSON string encoding one, or an
             object exposing a trip_data attribute (a Trip row)

    Returns:
        list of Segment (possibly empty)

    Raises:
        MalformedSegmentData: if raw is neither a list nor a JSON array
    """
    if hasattr(raw, 'trip_data'):
        raw = raw.trip_data

    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MalformedSegmentData(f"trip_data is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise MalformedSegmentData(f"trip_data must be an array, got {type(raw).__name__}")

    return [Segment.from_dict(item) for item in raw]


def serialize_segments(segments):
    return [segment.to_dict() for segment in segments]


def compose_business_id(trip_id, index):
    return f"{trip_id}{BUSINESS_ID_SEPARATOR}{index}"


def split_business_id(value):
    """Split "<record id>_<index>" into two ints, or None if malformed"""
    if value is None:
        return None
    parts = str(value).strip().split(BUSINESS_ID_SEPARATOR)
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        return None
    return int(parts[0]), int(parts[1])


def resolve_segment(trip, business_trip_id):
    """
    Find the segment a business id points at

    Returns a ResolvedSegment(segment, index), or None when the id is
    malformed, the index is out of range or the trip data is unreadable.
    Stale ids from client caches end up here, so this never raises.
    """
    parsed = split_business_id(business_trip_id)
    if parsed is None:
        return None

    _, index = parsed
    try:
        segments = parse_segments(trip)
    except MalformedSegmentData:
        logger.warning(f"[SEGMENTS] Unreadable trip_data while resolving {business_trip_id}")
        return None

    if index >= len(segments):
        return None
    return ResolvedSegment(segments[index], index)


def main_segment_index(segments):
    """Index of the main leg: the one flagged isMainTrip, else the first"""
    for index, segment in enumerate(segments):
        if segment.is_main_trip:
            return index
    return 0


def segments_from_legacy_rows(parent, children):
    """
    Build embedded segments from the one-row-per-segment representation

    The parent row is the main leg; each sub-trip row becomes a sub-leg in
    the given order. Seats come from the rows' available_seats columns.
    """
    segments = []
    for index, row in enumerate([parent, *children]):
        route = row.route if row.route_id else None
        origin = row.segment_origin or (route.origin if route else '')
        destination = row.segment_destination or (route.destination if route else '')
        source = _legacy_row_data(row)
        segments.append(Segment(
            origin=origin,
            destination=destination,
            departure_date=source.get('departureDate', ''),
            departure_time=source.get('departureTime', ''),
            arrival_time=source.get('arrivalTime', ''),
            price=source.get('price', 0),
            available_seats=row.available_seats if row.available_seats is not None else row.capacity,
            trip_id=compose_business_id(parent.id, index),
            is_main_trip=index == 0,
        ))
    return segments


def _legacy_row_data(row):
    """Schedule/price stored on a legacy row, which kept at most one segment object"""
    try:
        segments = parse_segments(row.trip_data)
    except MalformedSegmentData:
        return {}
    return segments[0].to_dict() if segments else {}
