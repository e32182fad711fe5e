# scheduling/urls.py
#
# REST API endpoints for the scheduling app via DRF router.
# Mounted under /api/ by gym_system/urls.py.
#
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BookingViewSet, MemberViewSet, ServiceViewSet, TrainerViewSet

router = DefaultRouter()
router.register(r"members", MemberViewSet, basename="member")
router.register(r"trainers", TrainerViewSet, basename="trainer")
router.register(r"services", ServiceViewSet, basename="service")
router.register(r"bookings", BookingViewSet, basename="booking")

urlpatterns = [
    path("", include(router.urls)),
]
