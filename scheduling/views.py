# scheduling/views.py
#
# Purpose:
# - JSON API over the scheduling services (booking lifecycle + trainer search).
# - Thin CRUD for members, trainers and services.
# - Permissions:
#   * Catalog writes are staff-only.
#   * Booking, cancelling and searching are public; confirm/complete are staff-only.
#
# Error mapping:
# - Rejected outcomes become 400/404/409 with {"detail", "code", "kind"}.
# - StoreUnavailable becomes 503 via scheduling_exception_handler (see settings).
#
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import BasePermission
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .models import Booking, Member, Service, Trainer
from .serializers import (
    BookingRequestSerializer,
    BookingSerializer,
    CancelRequestSerializer,
    MemberSerializer,
    ServiceSerializer,
    TrainerSerializer,
)
from .services.appointment_lifecycle import AppointmentLifecycle
from .services.results import ErrorKind, StoreUnavailable
from .services.slot_utils import combine_date_and_time
from .services.trainer_search import TrainerEligibilitySearch

REJECTION_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.TRAINER_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.MEMBER_CONFLICT: status.HTTP_409_CONFLICT,
}


def rejection_response(rejection):
    return Response(
        {"detail": rejection.message, "code": rejection.code, "kind": rejection.kind.value},
        status=REJECTION_STATUS.get(rejection.kind, status.HTTP_400_BAD_REQUEST),
    )


def scheduling_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER: store faults become a generic 503.
    The underlying error was already logged by the service layer.
    """
    if isinstance(exc, StoreUnavailable):
        return Response({"detail": str(exc)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return exception_handler(exc, context)


# -------------------- Permissions --------------------
class IsStaffOrReadOnly(BasePermission):
    """
    Read: anyone
    Write: staff only
    """
    def has_permission(self, request, view):
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return True
        return bool(request.user and request.user.is_staff)


class IsStaffOnly(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)


# -------------------- Catalog ViewSets --------------------
class SoftDeleteModelViewSet(viewsets.ModelViewSet):
    """
    DELETE only clears is_active. Bookings keep pointing at the row, so
    history survives and the row drops out of the active querysets.
    """
    def perform_destroy(self, instance):
        instance.is_active = False
        instance.save()


class MemberViewSet(SoftDeleteModelViewSet):
    queryset = Member.objects.filter(is_active=True).order_by("id")
    serializer_class = MemberSerializer
    permission_classes = [IsStaffOrReadOnly]


class TrainerViewSet(SoftDeleteModelViewSet):
    queryset = Trainer.objects.filter(is_active=True).order_by("id")
    serializer_class = TrainerSerializer
    permission_classes = [IsStaffOrReadOnly]


class ServiceViewSet(SoftDeleteModelViewSet):
    queryset = Service.objects.filter(is_active=True).order_by("id")
    serializer_class = ServiceSerializer
    permission_classes = [IsStaffOrReadOnly]


# -------------------- Bookings --------------------
class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Endpoints:
    - GET    /api/bookings/?member=&trainer=&status=   active bookings
    - POST   /api/bookings/                            book (PENDING)
    - GET    /api/bookings/{id}/
    - DELETE /api/bookings/{id}/                       soft delete
    - POST   /api/bookings/{id}/confirm/               staff only
    - POST   /api/bookings/{id}/complete/              staff only
    - POST   /api/bookings/{id}/cancel/                {"reason": "..."}
    - GET    /api/bookings/available-trainers/?service=&date=YYYY-MM-DD&time=HH:MM[&duration=]
    """
    serializer_class = BookingSerializer
    lookup_value_regex = r"\d+"

    def get_lifecycle(self):
        return AppointmentLifecycle()

    def get_search(self):
        return TrainerEligibilitySearch()

    def get_permissions(self):
        if self.action in ("confirm", "complete"):
            return [IsStaffOnly()]
        return super().get_permissions()

    def get_queryset(self):
        qs = Booking.objects.filter(is_active=True).order_by("-start_time")
        params = self.request.query_params
        if params.get("member", "").isdigit():
            qs = qs.filter(member_id=params["member"])
        if params.get("trainer", "").isdigit():
            qs = qs.filter(trainer_id=params["trainer"])
        if params.get("status"):
            qs = qs.filter(status=params["status"].strip().upper())
        return qs

    def create(self, request, *args, **kwargs):
        payload = BookingRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        outcome = self.get_lifecycle().book(
            member_id=data["member"].pk,
            trainer_id=data["trainer"].pk,
            service_id=data["service"].pk,
            start_time=data["start_time"],
            duration_minutes=data["duration_minutes"],
            price=data["price"],
            notes=data.get("notes", ""),
        )
        if not outcome.ok:
            return rejection_response(outcome)
        return Response(BookingSerializer(outcome.value).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        outcome = self.get_lifecycle().soft_delete(self._booking_id(pk))
        if not outcome.ok:
            return rejection_response(outcome)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):
        outcome = self.get_lifecycle().confirm(self._booking_id(pk))
        if not outcome.ok:
            return rejection_response(outcome)
        return Response(BookingSerializer(outcome.value).data)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        outcome = self.get_lifecycle().complete(self._booking_id(pk))
        if not outcome.ok:
            return rejection_response(outcome)
        return Response(BookingSerializer(outcome.value).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        payload = CancelRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        outcome = self.get_lifecycle().cancel(self._booking_id(pk), payload.validated_data.get("reason"))
        if not outcome.ok:
            return rejection_response(outcome)
        return Response({"detail": "Booking cancelled."}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="available-trainers")
    def available_trainers(self, request):
        """
        Also accepts a missing duration; the service's own duration is used then.
        """
        service_id = (request.query_params.get("service") or "").strip()
        date_raw = (request.query_params.get("date") or "").strip()
        time_raw = (request.query_params.get("time") or "").strip()
        duration_raw = (request.query_params.get("duration") or "").strip()

        if not service_id or not date_raw or not time_raw:
            return Response(
                {"detail": "Missing 'service', 'date' or 'time'."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        service = None
        if service_id.isdigit():
            service = Service.objects.filter(pk=service_id, is_active=True).first()
        if service is None:
            return Response({"detail": "Service not found."}, status=status.HTTP_404_NOT_FOUND)

        try:
            start_time = combine_date_and_time(date_raw, time_raw)
            duration = int(duration_raw) if duration_raw else service.duration_minutes
        except ValueError:
            return Response(
                {"detail": "Invalid date/time. Use date=YYYY-MM-DD, time=HH:MM and an integer duration."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        outcome = self.get_search().find_available_trainers(service.pk, start_time, duration)
        if not outcome.ok:
            return rejection_response(outcome)
        return Response({
            "service": service.pk,
            "start_time": start_time.isoformat(),
            "duration_minutes": duration,
            "trainer_ids": outcome.value,
        })

    @staticmethod
    def _booking_id(pk):
        return int(pk)
