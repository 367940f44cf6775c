"""Trip-related views"""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.decorators import action

from ..models import Trip
from ..permissions import IsTripManager
from ..serializers import TripSerializer
from ..services import TripService
from ..utils.company_utils import scope_to_company
from ..utils.trip_expansion import SearchFilters

logger = logging.getLogger(__name__)


class TripSearchView(viewsets.ViewSet):
    """Search trips - one result per matching segment, or per trip when optimized"""
    permission_classes = [AllowAny]
    authentication_classes = []
    lookup_value_regex = r'\d+(_\d+)?'

    def list(self, request):
        filters = SearchFilters.from_query_params(request.query_params)
        results = TripService().search_trips(filters)
        return Response(results, status=status.HTTP_200_OK)

    def retrieve(self, request, pk=None):
        include_all = SearchFilters.from_query_params(request.query_params).include_all_visibilities
        business_id = pk if '_' in pk else f"{pk}_0"
        view = TripService().get_segment_view(business_id, include_all_visibilities=include_all)
        if view is None:
            return Response({'error': 'Trip segment not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(view, status=status.HTTP_200_OK)


class OperatorTripViewSet(viewsets.ModelViewSet):
    """Trip management for company staff"""
    serializer_class = TripSerializer
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsTripManager]

    def get_queryset(self):
        trips = Trip.objects.filter(is_sub_trip=False).select_related('route').order_by('id')
        return scope_to_company(trips, self.request.user)

    def perform_create(self, serializer):
        company_id = serializer.validated_data.get('company_id') or self.request.user.profile.company_key
        serializer.save(company_id=company_id)

    @action(detail=True, methods=['post'])
    def publish(self, request, pk=None):
        trip = get_object_or_404(self.get_queryset(), pk=pk)
        try:
            trip = TripService().publish_trip(trip.id)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        logger.info(f"[TRIP] Trip {trip.id} published by {request.user.username}")
        return Response({'message': 'Trip published successfully', 'visibility': trip.visibility})
