from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AvailabilityWindowViewSet, QualificationViewSet

router = DefaultRouter()
router.register(r"windows", AvailabilityWindowViewSet, basename="availability-window")
router.register(r"qualifications", QualificationViewSet, basename="qualification")

urlpatterns = [path("", include(router.urls))]
