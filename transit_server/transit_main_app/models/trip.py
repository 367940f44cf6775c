"""Trip-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import TripVisibility, BusinessRules


class Trip(models.Model):
    route = models.ForeignKey('Route', on_delete=models.PROTECT, null=True, blank=True, related_name='trips')
    company_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    vehicle = models.ForeignKey('Vehicle', on_delete=models.SET_NULL, null=True, blank=True, related_name='trips')
    driver = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='driven_trips')
    visibility = models.CharField(max_length=20, choices=TripVisibility.CHOICES, default=TripVisibility.PUBLISHED, db_index=True)
    capacity = models.IntegerField(default=BusinessRules.DEFAULT_CAPACITY)
    trip_data = models.JSONField(default=list, blank=True)

    # One-row-per-segment representation used before segments were embedded in trip_data
    is_sub_trip = models.BooleanField(default=False)
    parent_trip = models.ForeignKey('self', on_delete=models.CASCADE, null=True, blank=True, related_name='sub_trips')
    available_seats = models.IntegerField(null=True, blank=True)
    segment_origin = models.CharField(max_length=150, null=True, blank=True)
    segment_destination = models.CharField(max_length=150, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['company_id', 'visibility'], name='trip_company_visibility_idx'),
        ]

    def __str__(self):
        if self.route_id:
            return f"Trip {self.id} - {self.route}"
        return f"Trip {self.id}"

    @property
    def is_legacy_row(self):
        """True when seats live in available_seats columns instead of trip_data"""
        return self.is_sub_trip or self.parent_trip_id is not None

    @property
    def legacy_root_id(self):
        return self.parent_trip_id or self.id
