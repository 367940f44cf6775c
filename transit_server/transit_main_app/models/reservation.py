"""Reservation-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import ReservationStatus, PaymentStatus, PaymentMethod, BusinessRules


class Reservation(models.Model):
    company_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    trip_details = models.JSONField(default=dict)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    advance_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    advance_payment_method = models.CharField(max_length=20, choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.CHOICES, default=PaymentStatus.PENDING)
    status = models.CharField(max_length=20, choices=ReservationStatus.CHOICES, default=ReservationStatus.CONFIRMED, db_index=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_reservations')

    # Check-in markers; older rows may carry only some of them
    checked = models.BooleanField(default=False)
    check_count = models.IntegerField(default=0)
    checked_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='checked_reservations')
    checked_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['company_id', 'status'], name='reservation_company_status_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.status})"

    @property
    def code(self):
        return f"R-{str(self.id or 0).zfill(BusinessRules.RESERVATION_CODE_WIDTH)}"

    @property
    def is_checked(self):
        return reservation_is_checked(self)

    @property
    def is_canceled(self):
        return self.status in ReservationStatus.CANCELED_STATES


class Passenger(models.Model):
    reservation = models.ForeignKey(Reservation, on_delete=models.CASCADE, related_name='passengers')
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)

    def __str__(self):
        return f"{self.first_name} {self.last_name}"


def reservation_is_checked(reservation):
    """A reservation counts as boarded if any of the check-in markers is set"""
    return bool(
        getattr(reservation, 'checked', False)
        or getattr(reservation, 'checked_by_id', None)
        or getattr(reservation, 'checked_at', None)
        or (getattr(reservation, 'check_count', 0) or 0) > 0
    )
