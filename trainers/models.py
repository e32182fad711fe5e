# trainers/models.py
#
# Trainer schedule data maintained by gym staff.
# Both models point to scheduling.Trainer to avoid having two Trainer models.
#
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models


class AvailabilityWindow(models.Model):
    """
    Recurring weekly time range when a trainer can be booked.

    - day_of_week counts from Sunday: Sunday=0 .. Saturday=6
      (date.weekday() is Monday=0; see interval_math.day_of_week)
    - a trainer may have several windows on the same day (split shifts)
    - windows never span midnight (end_time must be after start_time)
    """
    DAY_CHOICES = [
        (0, "Sunday"),
        (1, "Monday"),
        (2, "Tuesday"),
        (3, "Wednesday"),
        (4, "Thursday"),
        (5, "Friday"),
        (6, "Saturday"),
    ]

    trainer = models.ForeignKey(
        "scheduling.Trainer",
        on_delete=models.CASCADE,
        related_name="availability_windows",
    )
    day_of_week = models.PositiveSmallIntegerField(
        choices=DAY_CHOICES,
        validators=[MaxValueValidator(6)],
    )
    start_time = models.TimeField()
    end_time = models.TimeField()
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["trainer_id", "day_of_week", "start_time"]

    def clean(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError("Window end time must be after its start time.")

    def __str__(self):
        return f"{self.trainer.name}: {self.get_day_of_week_display()} {self.start_time:%H:%M}-{self.end_time:%H:%M}"


class Qualification(models.Model):
    """
    A trainer's eligibility to deliver a service.
    Only active rows make the trainer a candidate in trainer search.
    """
    trainer = models.ForeignKey(
        "scheduling.Trainer",
        on_delete=models.CASCADE,
        related_name="qualifications",
    )
    service = models.ForeignKey(
        "scheduling.Service",
        on_delete=models.CASCADE,
        related_name="qualifications",
    )
    experience_years = models.PositiveSmallIntegerField(default=0)
    certificate_name = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["trainer_id", "service_id"]
        constraints = [
            models.UniqueConstraint(fields=["trainer", "service"], name="uniq_trainer_service_qualification"),
        ]

    def __str__(self):
        return f"{self.trainer.name} → {self.service.name}"
