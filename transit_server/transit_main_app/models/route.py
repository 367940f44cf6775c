"""Route models"""
from django.db import models


class Route(models.Model):
    name = models.CharField(max_length=150)
    origin = models.CharField(max_length=150)
    destination = models.CharField(max_length=150)
    stops = models.JSONField(default=list, blank=True)
    company_id = models.CharField(max_length=100, null=True, blank=True, db_index=True)

    def __str__(self):
        return f"{self.name}: {self.origin} → {self.destination}"

    def get_points(self):
        return [self.origin, *(self.stops or []), self.destination]

    def segment_pairs(self):
        """Every origin → destination pair along the route, in travel order"""
        points = self.get_points()
        return [
            {'origin': points[i], 'destination': points[j]}
            for i in range(len(points))
            for j in range(i + 1, len(points))
        ]
