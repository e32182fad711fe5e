"""
results.py
----------
Typed outcomes for scheduling operations.

Business rejections (bad input, trainer not working, double booking, unknown
booking, illegal state change) are expected and callers branch on them, so
they are returned as values:

    outcome = lifecycle.book(...)
    if outcome.ok:
        booking = outcome.value
    else:
        outcome.kind, outcome.code, outcome.message

Store failures are the only thing raised, as StoreUnavailable. The original
exception is chained for the logs but never shown to callers.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    SCHEDULE_MISMATCH = "schedule_mismatch"
    TRAINER_CONFLICT = "trainer_conflict"
    MEMBER_CONFLICT = "member_conflict"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"


# Stable machine-readable codes (one kind may have several codes)
INVALID_DURATION = "INVALID_DURATION"
INVALID_START = "INVALID_START"
TRAINER_NOT_SCHEDULED = "TRAINER_NOT_SCHEDULED"
TRAINER_DOUBLE_BOOKED = "TRAINER_DOUBLE_BOOKED"
MEMBER_DOUBLE_BOOKED = "MEMBER_DOUBLE_BOOKED"
BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
BOOKING_NOT_PENDING = "BOOKING_NOT_PENDING"
BOOKING_NOT_CONFIRMED = "BOOKING_NOT_CONFIRMED"
BOOKING_ALREADY_CANCELLED = "BOOKING_ALREADY_CANCELLED"
BOOKING_CANNOT_CANCEL_COMPLETED = "BOOKING_CANNOT_CANCEL_COMPLETED"


@dataclass(frozen=True)
class Ok:
    """Successful outcome carrying the operation's value."""

    value: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Business rejection: what kind, a stable code, and a message safe to show users."""

    kind: ErrorKind
    code: str
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok, Rejected]


class StoreUnavailable(Exception):
    """Raised when a booking, window or qualification store fails unexpectedly."""

    default_message = "Scheduling data is temporarily unavailable."

    def __init__(self, operation: str):
        super().__init__(self.default_message)
        self.operation = operation


def validate_interval(start_time, duration_minutes):
    """
    Return a VALIDATION rejection for a malformed interval, or None if it is usable.
    Checked before any store is touched.
    """
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        return Rejected(
            ErrorKind.VALIDATION,
            INVALID_DURATION,
            "Duration must be a positive number of minutes.",
        )
    if not isinstance(start_time, datetime):
        return Rejected(ErrorKind.VALIDATION, INVALID_START, "A start time is required.")
    return None


@contextmanager
def store_access(operation: str, **context):
    """
    Wrap store calls for one operation.
    Any unexpected exception is logged with the operation and ids, then
    re-raised as StoreUnavailable.
    """
    try:
        yield
    except StoreUnavailable:
        raise
    except Exception as exc:
        details = ", ".join(f"{key}={value}" for key, value in sorted(context.items()))
        logger.exception("Store access failed during %s (%s)", operation, details)
        raise StoreUnavailable(operation) from exc
