"""Route serializers"""
from rest_framework import serializers
from ..models import Route


class RouteSerializer(serializers.ModelSerializer):
    stops = serializers.ListField(child=serializers.CharField(max_length=150), required=False)
    num_stops = serializers.SerializerMethodField()

    class Meta:
        model = Route
        fields = ['id', 'name', 'origin', 'destination', 'stops', 'num_stops', 'company_id']

    def get_num_stops(self, obj):
        return len(obj.stops or [])

    def validate(self, data):
        origin = data.get('origin', getattr(self.instance, 'origin', None))
        destination = data.get('destination', getattr(self.instance, 'destination', None))
        if origin and destination and origin == destination:
            raise serializers.ValidationError("Origin and destination must differ")
        return data
