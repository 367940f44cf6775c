"""Reservation-related serializers"""
from rest_framework import serializers
from ..models import Reservation, Passenger
from ..utils.constants import PaymentMethod, PaymentStatus


class PassengerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Passenger
        fields = ['id', 'first_name', 'last_name']


class TripDetailsSerializer(serializers.Serializer):
    recordId = serializers.IntegerField(min_value=1)
    tripId = serializers.CharField(max_length=50)
    seats = serializers.IntegerField(min_value=1, required=False)


class ReservationSerializer(serializers.ModelSerializer):
    passengers = PassengerSerializer(many=True, read_only=True)
    code = serializers.CharField(read_only=True)
    is_checked = serializers.BooleanField(read_only=True)

    class Meta:
        model = Reservation
        fields = ['id', 'code', 'company_id', 'trip_details', 'total_amount', 'advance_amount',
                  'advance_payment_method', 'email', 'phone', 'notes', 'payment_method', 'payment_status',
                  'status', 'created_by', 'is_checked', 'check_count', 'checked_by', 'checked_at',
                  'passengers', 'created_at']
        read_only_fields = ['company_id', 'trip_details', 'total_amount', 'advance_amount', 'advance_payment_method',
                            'email', 'phone', 'notes', 'payment_method', 'payment_status', 'status', 'created_by',
                            'check_count', 'checked_by', 'checked_at', 'created_at']


class ReservationCreateSerializer(serializers.Serializer):
    trip_details = TripDetailsSerializer()
    passengers = PassengerSerializer(many=True, required=False)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    advance_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, default=0)
    advance_payment_method = serializers.ChoiceField(choices=PaymentMethod.CHOICES, required=False, default=PaymentMethod.CASH)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.CHOICES, required=False, default=PaymentMethod.CASH)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.CHOICES, required=False, default=PaymentStatus.PENDING)

    def validate(self, data):
        if data.get('advance_amount') and data['advance_amount'] > data['total_amount']:
            raise serializers.ValidationError("Advance cannot exceed the total amount")
        return data
