"""Reservation-related views"""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.decorators import action

from ..models import Reservation, Trip
from ..permissions import IsBackOfficeUser, CanBoardPassengers
from ..serializers import ReservationSerializer, ReservationCreateSerializer
from ..services import (
    ReservationService, InsufficientSeatsError, InvalidTripDetailsError, ReservationAlreadyCanceledError,
)
from ..utils.company_utils import scope_to_company

logger = logging.getLogger(__name__)


class ReservationViewSet(viewsets.GenericViewSet):
    serializer_class = ReservationSerializer
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsBackOfficeUser]

    def get_queryset(self):
        reservations = Reservation.objects.prefetch_related('passengers').order_by('id')
        record_id = self.request.query_params.get('recordId')
        if record_id and record_id.isdigit():
            reservations = reservations.filter(trip_details__recordId=int(record_id))
        return scope_to_company(reservations, self.request.user)

    def list(self, request):
        serializer = ReservationSerializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):
        reservation = get_object_or_404(self.get_queryset(), pk=pk)
        return Response(ReservationSerializer(reservation).data)

    def create(self, request):
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        trip_details = dict(data.pop('trip_details'))
        passengers = data.pop('passengers', [])

        try:
            reservation = ReservationService().create_reservation(
                trip_details, passengers=passengers, created_by=request.user, **data
            )
        except InsufficientSeatsError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidTripDetailsError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        reservation = get_object_or_404(self.get_queryset(), pk=pk)
        refund = str(request.data.get('refund', '')).lower() in ('1', 'true', 'yes')
        try:
            reservation = ReservationService().cancel_reservation(reservation.id, refund=refund)
        except ReservationAlreadyCanceledError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReservationSerializer(reservation).data)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanBoardPassengers])
    def check(self, request, pk=None):
        reservation = get_object_or_404(self.get_queryset(), pk=pk)
        if reservation.is_canceled:
            return Response({'error': 'Canceled reservations cannot board'}, status=status.HTTP_400_BAD_REQUEST)

        reservation, first_scan = ReservationService().check_in(reservation.id, user=request.user)
        data = ReservationSerializer(reservation).data
        data['first_scan'] = first_scan
        return Response(data)


class BoardingListView(viewsets.ViewSet):
    """Reservations of one trip grouped by the segment they were sold on"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, CanBoardPassengers]

    def retrieve(self, request, pk=None):
        trip = get_object_or_404(scope_to_company(Trip.objects.all(), request.user), pk=pk)
        return Response(ReservationService().boarding_list(trip.id))
