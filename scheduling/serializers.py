from decimal import Decimal

from rest_framework import serializers

from .models import Booking, Member, Service, Trainer


class MemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = Member
        fields = ["id", "name", "email", "phone", "is_active"]


class TrainerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Trainer
        fields = ["id", "name", "email", "bio", "is_active"]


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "name", "description", "duration_minutes", "price", "is_active"]


class BookingSerializer(serializers.ModelSerializer):
    end_time = serializers.DateTimeField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "member",
            "trainer",
            "service",
            "start_time",
            "end_time",
            "duration_minutes",
            "price",
            "notes",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingRequestSerializer(serializers.Serializer):
    """
    Input for POST /api/bookings/.
    duration_minutes and price fall back to the service's catalog values.
    Overlap/schedule rules are NOT checked here; AppointmentLifecycle does that.
    """
    member = serializers.PrimaryKeyRelatedField(queryset=Member.objects.filter(is_active=True))
    trainer = serializers.PrimaryKeyRelatedField(queryset=Trainer.objects.filter(is_active=True))
    service = serializers.PrimaryKeyRelatedField(queryset=Service.objects.filter(is_active=True))
    start_time = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(required=False)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, min_value=Decimal("0.00"))
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        service = attrs["service"]
        attrs.setdefault("duration_minutes", service.duration_minutes)
        attrs.setdefault("price", service.price)
        return attrs


class CancelRequestSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=500)
