"""Fleet-related models"""
from django.db import models


class Vehicle(models.Model):
    plate_number = models.CharField(max_length=20, unique=True)
    economic_number = models.CharField(max_length=20, blank=True)
    brand = models.CharField(max_length=50, blank=True)
    model = models.CharField(max_length=50, blank=True)
    year = models.IntegerField(null=True, blank=True)
    capacity = models.IntegerField()
    has_ac = models.BooleanField(default=False)
    company_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)

    def __str__(self):
        return f"{self.plate_number} - {self.model}"
