# scheduling/models.py
#
# Purpose:
# - Core domain models for gym appointment scheduling.
#
# Design highlights:
# - Member / Trainer / Service: plain catalog entities maintained by CRUD screens.
#   • is_active is the soft-delete marker shared by every entity.
# - Booking:
#   • Records member, trainer, service, start_time and its own duration/price
#     (copied from the service at booking time, so later catalog edits don't move it)
#   • status is uppercase "PENDING", "CONFIRMED", "COMPLETED" or "CANCELLED"
#   • is_active=False hides a booking from every overlap and search check
#
# Notes for developers:
# - Bookings are never hard-deleted; use AppointmentLifecycle.soft_delete().
# - Overlap rules live in scheduling/services/, not in model.clean(), because
#   they need the trainer's schedule as well as other bookings.
#

from datetime import timedelta

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


# -------------------------
# Gym member (person who books)
# -------------------------
class Member(models.Model):
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


# -------------------------
# Trainer
# -------------------------
class Trainer(models.Model):
    """
    A personal trainer who can be booked.
    Weekly working windows and service qualifications live in the trainers app.
    """
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    bio = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


# -------------------------
# Service catalog item
# -------------------------
class Service(models.Model):
    """
    A service offered by the gym (personal training, pilates, ...).

    Rules:
    - price must be > 0
    - duration_minutes must be > 0
    - is_active controls visibility and bookability
    """
    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.name} (${self.price})"


# -------------------------
# Booking record
# -------------------------
class Booking(models.Model):
    """
    Appointment booking.

    Lifecycle:
    - PENDING -> CONFIRMED -> COMPLETED
    - PENDING or CONFIRMED -> CANCELLED
    - COMPLETED and CANCELLED are terminal
    """
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (CONFIRMED, "Confirmed"),
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
    ]
    TERMINAL_STATUSES = (COMPLETED, CANCELLED)

    member = models.ForeignKey(Member, on_delete=models.PROTECT, related_name="bookings")
    trainer = models.ForeignKey(Trainer, on_delete=models.PROTECT, related_name="bookings")
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name="bookings")
    start_time = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=8, decimal_places=2)
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=PENDING,
        help_text="Booking lifecycle status",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-start_time"]
        indexes = [
            models.Index(fields=["trainer", "start_time"], name="booking_trainer_start_idx"),
            models.Index(fields=["member", "start_time"], name="booking_member_start_idx"),
        ]

    @property
    def end_time(self):
        return self.start_time + timedelta(minutes=self.duration_minutes)

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES

    def __str__(self):
        return f"Booking #{self.pk} trainer={self.trainer_id} member={self.member_id} at {self.start_time}"
