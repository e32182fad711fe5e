"""
availability_checker.py
-----------------------
Decides whether a trainer or a member is free for a proposed interval.

Trainer check, in order:
1) the interval must fall entirely inside at least one active weekly window
   for the start's weekday (schedule mismatch otherwise), and
2) it must not overlap any active, non-terminal booking of that trainer.

Member check: only rule 2, against the member's own bookings. Members have
no working hours.

Overlap is strict: existing_start < new_end AND new_start < existing_end,
so back-to-back bookings are allowed. Both checks only read.
"""

import logging
from datetime import datetime

from . import results
from .interval_math import contains, day_of_week, interval_end, overlaps
from .results import ErrorKind, Ok, Rejected, store_access, validate_interval
from .stores import AvailabilityWindowStore, BookingStore

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    def __init__(self, bookings=None, windows=None):
        self.bookings = bookings if bookings is not None else BookingStore()
        self.windows = windows if windows is not None else AvailabilityWindowStore()

    def is_trainer_available(self, trainer_id, start_time, duration_minutes):
        invalid = validate_interval(start_time, duration_minutes)
        if invalid:
            return invalid

        end_time = interval_end(start_time, duration_minutes)

        with store_access("is_trainer_available", trainer_id=trainer_id):
            windows = self.windows.load_active_windows(trainer_id, day_of_week(start_time))
            if not self._fits_any_window(windows, start_time, end_time):
                return Rejected(
                    ErrorKind.SCHEDULE_MISMATCH,
                    results.TRAINER_NOT_SCHEDULED,
                    f"Trainer is not available on {start_time:%A} "
                    f"{start_time:%H:%M}-{end_time:%H:%M}.",
                )

            existing = self.bookings.load_active_for_trainer(trainer_id)

        if self._has_conflict(existing, start_time, end_time):
            return Rejected(
                ErrorKind.TRAINER_CONFLICT,
                results.TRAINER_DOUBLE_BOOKED,
                "Trainer already has another appointment at the selected time.",
            )
        return Ok(True)

    def is_member_available(self, member_id, start_time, duration_minutes):
        invalid = validate_interval(start_time, duration_minutes)
        if invalid:
            return invalid

        end_time = interval_end(start_time, duration_minutes)
        with store_access("is_member_available", member_id=member_id):
            existing = self.bookings.load_active_for_member(member_id)

        if self._has_conflict(existing, start_time, end_time):
            return Rejected(
                ErrorKind.MEMBER_CONFLICT,
                results.MEMBER_DOUBLE_BOOKED,
                "You already have another appointment at the selected time.",
            )
        return Ok(True)

    def _fits_any_window(self, windows, start_time, end_time) -> bool:
        """
        Windows are wall-clock times on the start's own date and tzinfo.
        An interval that runs past midnight ends after every window, so it
        never fits.
        """
        day = start_time.date()
        for window in windows:
            window_start = datetime.combine(day, window.start_time, tzinfo=start_time.tzinfo)
            window_end = datetime.combine(day, window.end_time, tzinfo=start_time.tzinfo)
            if contains(window_start, window_end, start_time, end_time):
                return True
        return False

    def _has_conflict(self, existing, start_time, end_time) -> bool:
        # inactive and terminal bookings never block a slot
        for booking in existing:
            if not booking.is_active or booking.status in booking.TERMINAL_STATUSES:
                continue
            if overlaps(booking.start_time, booking.end_time, start_time, end_time):
                logger.debug(
                    "Overlap with booking %s (%s-%s)",
                    booking.pk, booking.start_time, booking.end_time,
                )
                return True
        return False
