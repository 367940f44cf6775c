"""User-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import UserRole


class Profile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.TICKET_OFFICE, db_index=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    company_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)
    company = models.CharField(max_length=150, null=True, blank=True)
    profile_picture = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.full_name or self.user.username} ({self.role})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def company_key(self):
        """Company identifier used by trips (older accounts only stored the name)"""
        return self.company_id or self.company
