from rest_framework import serializers

from .models import AvailabilityWindow, Qualification


class AvailabilityWindowSerializer(serializers.ModelSerializer):
    class Meta:
        model = AvailabilityWindow
        fields = ["id", "trainer", "day_of_week", "start_time", "end_time", "is_active"]

    def validate(self, attrs):
        start = attrs.get("start_time", getattr(self.instance, "start_time", None))
        end = attrs.get("end_time", getattr(self.instance, "end_time", None))
        if start and end and end <= start:
            raise serializers.ValidationError("Window end time must be after its start time.")
        return attrs


class QualificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Qualification
        fields = ["id", "trainer", "service", "experience_years", "certificate_name", "is_active"]
