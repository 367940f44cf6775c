"""Availability service - seat inventory updates across a trip and its segments"""
import logging

from django.db import transaction
from django.db.models import F, Q

from ..models import Trip
from ..utils.segments import (
    parse_segments, serialize_segments, split_business_id, main_segment_index,
    compose_business_id, MalformedSegmentData,
)

logger = logging.getLogger(__name__)


def _parse_target(trip_id):
    """
    Accept a trip row id or a segment business id

    Returns (record_id, segment_index); segment_index is None for a bare row id.
    """
    if isinstance(trip_id, int) and not isinstance(trip_id, bool):
        return trip_id, None
    text = str(trip_id).strip() if trip_id is not None else ''
    if text.isdigit():
        return int(text), None
    parsed = split_business_id(text)
    if parsed is None:
        return None, None
    return parsed


class AvailabilityService:
    """Service for seat availability propagation"""

    def adjust_availability(self, trip_id, seat_delta):
        """
        Apply a seat delta to a trip

        Args:
            trip_id: trip row id, or "<row id>_<segment index>" business id
            seat_delta: negative for a new reservation, positive for a cancellation

        Returns:
            True if seats were updated, False if the trip/segment could not be
            resolved (logged, never raised: the reservation change that
            triggered this has already happened)
        """
        record_id, segment_index = _parse_target(trip_id)
        if record_id is None:
            logger.warning(f"[AVAILABILITY] Unrecognized trip id {trip_id!r}, propagation skipped")
            return False
        if not seat_delta:
            return True

        with transaction.atomic():
            trip = Trip.objects.select_for_update().filter(id=record_id).first()
            if trip is None:
                logger.warning(f"[AVAILABILITY] Trip {record_id} not found, propagation of {seat_delta} seats skipped")
                return False

            if trip.is_legacy_row or trip.sub_trips.exists():
                return self._adjust_legacy_rows(trip, seat_delta)
            return self._adjust_segment(trip, segment_index, seat_delta)

    def _adjust_legacy_rows(self, trip, seat_delta):
        """Parent row and every sibling sub-trip share one pool; single UPDATE"""
        root_id = trip.legacy_root_id
        updated = Trip.objects.filter(
            Q(id=root_id) | Q(parent_trip_id=root_id)
        ).update(available_seats=F('available_seats') + seat_delta)
        logger.info(f"[AVAILABILITY] Legacy trip {root_id}: {seat_delta:+d} seats on {updated} row(s)")
        return updated > 0

    def _adjust_segment(self, trip, segment_index, seat_delta):
        """
        Only the referenced segment changes: each segment has its own inventory

        Seats are clamped to [0, capacity], so a delta larger than the seats
        left is not undone by the opposite delta. create_reservation checks
        availability first, which keeps reserve-then-cancel exact.
        """
        try:
            segments = parse_segments(trip.trip_data)
        except MalformedSegmentData as e:
            logger.warning(f"[AVAILABILITY] Trip {trip.id} has unreadable trip_data ({e}), propagation skipped")
            return False
        if not segments:
            logger.warning(f"[AVAILABILITY] Trip {trip.id} has no sellable segments, propagation of {seat_delta} seats skipped")
            return False

        if segment_index is None:
            segment_index = main_segment_index(segments)
        if segment_index >= len(segments):
            logger.warning(
                f"[AVAILABILITY] Segment {compose_business_id(trip.id, segment_index)} out of range "
                f"({len(segments)} segments), propagation skipped"
            )
            return False

        segment = segments[segment_index]
        capacity = trip.capacity or None
        current = segment.available_seats
        if current is None:
            current = capacity or 0

        new_seats = max(current + seat_delta, 0)
        if capacity is not None:
            new_seats = min(new_seats, capacity)

        segments[segment_index] = segment.with_seats(new_seats)
        trip.trip_data = serialize_segments(segments)
        trip.save(update_fields=['trip_data', 'updated_at'])

        logger.info(
            f"[AVAILABILITY] Segment {compose_business_id(trip.id, segment_index)} "
            f"({segment.origin} → {segment.destination}): {current} → {new_seats} seats"
        )
        return True

    def validate_seat_availability(self, record_id, business_trip_id, seats_requested):
        """Check the referenced segment has at least seats_requested seats left"""
        if not record_id or not business_trip_id or not seats_requested or seats_requested <= 0:
            logger.info(f"[AVAILABILITY] Invalid availability check: {record_id}, {business_trip_id}, {seats_requested}")
            return False

        parsed = split_business_id(business_trip_id)
        if parsed is None:
            return False

        trip = Trip.objects.filter(id=record_id).first()
        if trip is None:
            return False

        if trip.is_legacy_row or trip.sub_trips.exists():
            return (trip.available_seats or 0) >= seats_requested

        try:
            segments = parse_segments(trip.trip_data)
        except MalformedSegmentData:
            return False

        _, index = parsed
        if index >= len(segments):
            return False

        available = segments[index].available_seats
        if available is None or available < 0:
            return False
        return available >= seats_requested
