from django.urls import path, include
from rest_framework import routers

from .views import (
    TripSearchView, OperatorTripViewSet, RouteViewSet,
    ReservationViewSet, BoardingListView,
)

router = routers.DefaultRouter()
router.register(r"trips", TripSearchView, basename='trips')
router.register(r"routes", RouteViewSet, basename="routes")
router.register(r"reservations", ReservationViewSet, basename="reservations")
router.register(r"boarding-list", BoardingListView, basename="boarding-list")

# Operator endpoints
router.register(r"operator/trips", OperatorTripViewSet, basename="operator-trips")

urlpatterns = [
    path('', include(router.urls)),
]
