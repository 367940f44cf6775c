"""Trip-related serializers"""
from rest_framework import serializers
from ..models import Trip
from ..utils.segments import compose_business_id


class SegmentSerializer(serializers.Serializer):
    """One element of Trip.trip_data, in its stored camelCase shape"""
    origin = serializers.CharField(max_length=150)
    destination = serializers.CharField(max_length=150)
    departureDate = serializers.DateField()
    departureTime = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    arrivalTime = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    price = serializers.FloatField(min_value=0)
    availableSeats = serializers.IntegerField(min_value=0)
    tripId = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    isMainTrip = serializers.BooleanField(required=False, default=False)


class TripSerializer(serializers.ModelSerializer):
    trip_data = SegmentSerializer(many=True)

    class Meta:
        model = Trip
        fields = ['id', 'route', 'company_id', 'vehicle', 'driver', 'visibility', 'capacity', 'trip_data',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, data):
        segments = data.get('trip_data')
        if segments is not None:
            if not segments:
                raise serializers.ValidationError({'trip_data': 'A trip needs at least one segment'})
            capacity = data.get('capacity', getattr(self.instance, 'capacity', None))
            if capacity is not None and any(s['availableSeats'] > capacity for s in segments):
                raise serializers.ValidationError({'trip_data': 'availableSeats cannot exceed capacity'})
        return data

    def _segments_for_storage(self, trip_id, segments):
        """Dates as ISO strings; tripId/isMainTrip filled in travel order"""
        has_main = any(s.get('isMainTrip') for s in segments)
        stored = []
        for index, segment in enumerate(segments):
            item = dict(segment)
            item['departureDate'] = segment['departureDate'].isoformat()
            item['tripId'] = compose_business_id(trip_id, index)
            if not has_main:
                item['isMainTrip'] = index == 0
            stored.append(item)
        return stored

    def create(self, validated_data):
        segments = validated_data.pop('trip_data')
        trip = Trip.objects.create(trip_data=[], **validated_data)
        trip.trip_data = self._segments_for_storage(trip.id, segments)
        trip.save(update_fields=['trip_data'])
        return trip

    def update(self, instance, validated_data):
        segments = validated_data.pop('trip_data', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if segments is not None:
            instance.trip_data = self._segments_for_storage(instance.id, segments)
        instance.save()
        return instance
