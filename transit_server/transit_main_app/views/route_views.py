"""Route-related views"""
from rest_framework import viewsets
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.decorators import action

from ..models import Route
from ..permissions import IsTripManager
from ..serializers import RouteSerializer
from ..utils.company_utils import scope_to_company


class RouteViewSet(viewsets.ModelViewSet):
    serializer_class = RouteSerializer
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsTripManager]

    def get_queryset(self):
        return scope_to_company(Route.objects.all().order_by('id'), self.request.user)

    def perform_create(self, serializer):
        company_id = serializer.validated_data.get('company_id') or self.request.user.profile.company_key
        serializer.save(company_id=company_id)

    @action(detail=True, methods=['get'])
    def segments(self, request, pk=None):
        """Every sellable origin → destination pair of the route"""
        route = self.get_object()
        return Response({'route_id': route.id, 'segments': route.segment_pairs()})
