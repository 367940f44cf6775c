"""Management command to fold legacy sub-trip rows into their parent's trip_data"""
import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from transit_main_app.models import Trip, Reservation
from transit_main_app.utils.segments import segments_from_legacy_rows, serialize_segments, compose_business_id

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Convert one-row-per-segment trips into a single trip with embedded segments'

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='Report what would change without writing')

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        parents = Trip.objects.filter(is_sub_trip=False, sub_trips__isnull=False).distinct().order_by('id')

        total = parents.count()
        if total == 0:
            self.stdout.write('No legacy trips to fold')
            return

        self.stdout.write(f'Folding {total} legacy trips{" (dry run)" if dry_run else ""}...')

        folded = 0
        for parent in parents:
            children = list(parent.sub_trips.select_related('route').order_by('id'))
            segments = segments_from_legacy_rows(parent, children)
            self.stdout.write(f'  Trip {parent.id}: {len(segments)} segments from {len(children)} sub-trip rows')
            if dry_run:
                continue
            self._fold(parent, children, segments)
            folded += 1

        if dry_run:
            self.stdout.write(self.style.WARNING('Dry run: nothing was written'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Completed: {folded}/{total} trips folded'))

    @transaction.atomic
    def _fold(self, parent, children, segments):
        # reservations sold on a sub-trip row now point at the matching segment
        for index, child in enumerate(children, start=1):
            business_id = compose_business_id(parent.id, index)
            for reservation in Reservation.objects.filter(trip_details__recordId=child.id):
                details = dict(reservation.trip_details)
                details.update({'recordId': parent.id, 'tripId': business_id})
                reservation.trip_details = details
                reservation.save(update_fields=['trip_details', 'updated_at'])

        parent.trip_data = serialize_segments(segments)
        parent.available_seats = None
        parent.save(update_fields=['trip_data', 'available_seats', 'updated_at'])
        Trip.objects.filter(id__in=[child.id for child in children]).delete()
        logger.info(f"[MIGRATE] Trip {parent.id}: folded {len(children)} sub-trip rows into trip_data")
