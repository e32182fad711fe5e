"""
interval_math.py
----------------
Half-open interval helpers used by every availability decision.

An interval [start, end) contains start but not end, so two bookings that
touch (one ends at 11:00, the next starts at 11:00) do not overlap.
Callers are expected to pass end > start.
"""

from datetime import timedelta


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and b_start < a_end


def contains(window_start, window_end, a_start, a_end) -> bool:
    return a_start >= window_start and a_end <= window_end


def interval_end(start, duration_minutes: int):
    return start + timedelta(minutes=duration_minutes)


def day_of_week(moment) -> int:
    """Sunday=0 .. Saturday=6, the numbering stored on AvailabilityWindow."""
    return (moment.weekday() + 1) % 7
