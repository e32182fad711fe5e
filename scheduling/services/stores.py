"""
stores.py
---------
Django ORM access for the scheduling services.

Every service takes its stores in the constructor, so tests (or another
persistence layer) can pass their own objects with the same methods.

Scoping rules:
- every read returns active rows only (is_active=True);
- booking loads for conflict checks also drop terminal statuses
  (COMPLETED, CANCELLED), because those no longer occupy the slot.
"""

from contextlib import contextmanager

from django.db import transaction

from trainers.models import AvailabilityWindow, Qualification

from ..models import Booking, Member, Trainer


class BookingStore:
    def load_active_for_trainer(self, trainer_id):
        return list(
            Booking.objects.filter(trainer_id=trainer_id, is_active=True)
            .exclude(status__in=Booking.TERMINAL_STATUSES)
            .order_by("start_time")
        )

    def load_active_for_member(self, member_id):
        return list(
            Booking.objects.filter(member_id=member_id, is_active=True)
            .exclude(status__in=Booking.TERMINAL_STATUSES)
            .order_by("start_time")
        )

    def load_by_id(self, booking_id):
        return Booking.objects.filter(pk=booking_id, is_active=True).first()

    def insert(self, booking):
        booking.save(force_insert=True)
        return booking

    def update(self, booking, fields):
        booking.save(update_fields=list(fields))
        return booking

    @contextmanager
    def reserve(self, trainer_id, member_id):
        """
        Serialize bookings that touch the same trainer or member.

        Row locks are taken trainer first, then member, so two bookings never
        wait on each other in opposite order. On SQLite select_for_update is a
        no-op; the transaction still makes the insert all-or-nothing.
        """
        with transaction.atomic():
            list(Trainer.objects.select_for_update().filter(pk=trainer_id))
            list(Member.objects.select_for_update().filter(pk=member_id))
            yield


class AvailabilityWindowStore:
    def load_active_windows(self, trainer_id, day_of_week: int):
        return list(
            AvailabilityWindow.objects.filter(
                trainer_id=trainer_id,
                day_of_week=day_of_week,
                is_active=True,
            ).order_by("start_time")
        )


class QualificationStore:
    def load_qualified_trainer_ids(self, service_id):
        """
        Distinct ids of active trainers holding an active qualification for
        the service, ordered by trainer id.
        """
        ids = (
            Qualification.objects.filter(
                service_id=service_id,
                is_active=True,
                trainer__is_active=True,
            )
            .order_by("trainer_id")
            .values_list("trainer_id", flat=True)
            .distinct()
        )
        return list(ids)
