from rest_framework import viewsets

from scheduling.views import IsStaffOnly

from .models import AvailabilityWindow, Qualification
from .serializers import AvailabilityWindowSerializer, QualificationSerializer


class AvailabilityWindowViewSet(viewsets.ModelViewSet):
    queryset = AvailabilityWindow.objects.all().order_by("trainer_id", "day_of_week", "start_time")
    serializer_class = AvailabilityWindowSerializer
    permission_classes = [IsStaffOnly]


class QualificationViewSet(viewsets.ModelViewSet):
    queryset = Qualification.objects.all().order_by("trainer_id", "service_id")
    serializer_class = QualificationSerializer
    permission_classes = [IsStaffOnly]
