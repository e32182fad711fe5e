"""
appointment_lifecycle.py
------------------------
Coordinates booking creation and every later status change.

State machine:
    PENDING -> CONFIRMED -> COMPLETED
    PENDING | CONFIRMED -> CANCELLED
COMPLETED and CANCELLED are terminal. Soft delete (is_active=False) is
separate from status and hides a booking from all future checks.

Booking:
- trainer availability is checked first, then the member's; the first
  rejection is returned unchanged and nothing is written.
- both checks and the insert run inside BookingStore.reserve(), which
  serializes concurrent bookings for the same trainer or member, so two
  requests for one slot cannot both pass the overlap check.
"""

import logging

from django.utils import timezone

from ..models import Booking
from . import results
from .availability_checker import AvailabilityChecker
from .results import ErrorKind, Ok, Rejected, store_access, validate_interval
from .stores import BookingStore

logger = logging.getLogger(__name__)

CANCEL_REASON_PREFIX = "[Cancel reason]"


class AppointmentLifecycle:
    def __init__(self, bookings=None, availability=None, clock=None):
        self.bookings = bookings if bookings is not None else BookingStore()
        self.availability = (
            availability if availability is not None else AvailabilityChecker(bookings=self.bookings)
        )
        self.clock = clock or timezone.now

    def book(self, member_id, trainer_id, service_id, start_time, duration_minutes, price, notes=""):
        """
        Create a PENDING booking after both availability checks pass.

        Args:
            member_id / trainer_id / service_id: primary keys
            start_time: datetime (aware when USE_TZ is on)
            duration_minutes: int > 0
            price: Decimal charged for this booking
            notes: optional free text

        Returns:
            Ok(Booking) or the first Rejected from validation / trainer / member checks.
        """
        invalid = validate_interval(start_time, duration_minutes)
        if invalid:
            return invalid

        ids = {"member_id": member_id, "trainer_id": trainer_id, "service_id": service_id}
        with store_access("book", **ids):
            with self.bookings.reserve(trainer_id, member_id):
                trainer_check = self.availability.is_trainer_available(trainer_id, start_time, duration_minutes)
                if not trainer_check.ok:
                    return trainer_check

                member_check = self.availability.is_member_available(member_id, start_time, duration_minutes)
                if not member_check.ok:
                    return member_check

                now = self.clock()
                booking = Booking(
                    member_id=member_id,
                    trainer_id=trainer_id,
                    service_id=service_id,
                    start_time=start_time,
                    duration_minutes=duration_minutes,
                    price=price,
                    notes=notes or "",
                    status=Booking.PENDING,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                )
                booking = self.bookings.insert(booking)

        logger.info(
            "Booking %s created: trainer=%s member=%s start=%s duration=%s",
            booking.pk, trainer_id, member_id, start_time, duration_minutes,
        )
        return Ok(booking)

    def confirm(self, booking_id):
        with store_access("confirm", booking_id=booking_id):
            booking = self.bookings.load_by_id(booking_id)
            if booking is None:
                return self._not_found(booking_id)
            if booking.status != Booking.PENDING:
                return Rejected(
                    ErrorKind.INVALID_TRANSITION,
                    results.BOOKING_NOT_PENDING,
                    "Only pending bookings can be confirmed.",
                )
            booking.status = Booking.CONFIRMED
            booking.updated_at = self.clock()
            self.bookings.update(booking, ["status", "updated_at"])

        logger.info("Booking %s confirmed", booking_id)
        return Ok(booking)

    def complete(self, booking_id):
        with store_access("complete", booking_id=booking_id):
            booking = self.bookings.load_by_id(booking_id)
            if booking is None:
                return self._not_found(booking_id)
            if booking.status != Booking.CONFIRMED:
                return Rejected(
                    ErrorKind.INVALID_TRANSITION,
                    results.BOOKING_NOT_CONFIRMED,
                    "Only confirmed bookings can be completed.",
                )
            booking.status = Booking.COMPLETED
            booking.updated_at = self.clock()
            self.bookings.update(booking, ["status", "updated_at"])

        logger.info("Booking %s completed", booking_id)
        return Ok(booking)

    def cancel(self, booking_id, reason=None):
        """
        Cancel a PENDING or CONFIRMED booking.
        A non-blank reason is appended to notes for staff visibility.
        """
        with store_access("cancel", booking_id=booking_id):
            booking = self.bookings.load_by_id(booking_id)
            if booking is None:
                return self._not_found(booking_id)
            if booking.status == Booking.CANCELLED:
                return Rejected(
                    ErrorKind.INVALID_TRANSITION,
                    results.BOOKING_ALREADY_CANCELLED,
                    "This booking is already cancelled.",
                )
            if booking.status == Booking.COMPLETED:
                return Rejected(
                    ErrorKind.INVALID_TRANSITION,
                    results.BOOKING_CANNOT_CANCEL_COMPLETED,
                    "Completed bookings cannot be cancelled.",
                )

            booking.status = Booking.CANCELLED
            reason = (reason or "").strip()
            if reason:
                line = f"{CANCEL_REASON_PREFIX} {reason}"
                booking.notes = f"{booking.notes}\n{line}" if booking.notes else line
            booking.updated_at = self.clock()
            self.bookings.update(booking, ["status", "notes", "updated_at"])

        logger.info("Booking %s cancelled", booking_id)
        return Ok(True)

    def soft_delete(self, booking_id):
        with store_access("soft_delete", booking_id=booking_id):
            booking = self.bookings.load_by_id(booking_id)
            if booking is None:
                return self._not_found(booking_id)
            booking.is_active = False
            booking.updated_at = self.clock()
            self.bookings.update(booking, ["is_active", "updated_at"])

        logger.info("Booking %s soft-deleted (status stays %s)", booking_id, booking.status)
        return Ok(True)

    def _not_found(self, booking_id):
        return Rejected(
            ErrorKind.NOT_FOUND,
            results.BOOKING_NOT_FOUND,
            f"Booking #{booking_id} was not found.",
        )
