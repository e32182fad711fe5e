"""
slot_utils.py
-------------
Helpers to turn a 'YYYY-MM-DD' date plus an 'HH:MM' time of day into the single
timezone-aware start timestamp the scheduling services expect.
"""

from datetime import date, datetime, time

from django.utils import timezone


def _parse_hhmm(value: str) -> time:
    h, m = value.split(":")
    return time(int(h), int(m))


def _make_aware(dt_naive: datetime):
    """
    Attach Django's current timezone to a naive datetime.
    Aware values are returned unchanged.
    """
    if timezone.is_aware(dt_naive):
        return dt_naive
    return timezone.make_aware(dt_naive, timezone.get_current_timezone())


def combine_date_and_time(date_str: str, time_str: str) -> datetime:
    """
    Combine 'YYYY-MM-DD' and 'HH:MM' into an aware datetime.

    Raises:
        ValueError: if either part is malformed.
    """
    day = date.fromisoformat((date_str or "").strip())
    slot_time = _parse_hhmm((time_str or "").strip())
    return _make_aware(datetime.combine(day, slot_time))
