from __future__ import annotations

from datetime import datetime, timedelta

from .models import BusinessHours, DayHours

_DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def hours_for_day(hours: BusinessHours, when: datetime) -> DayHours | None:
    return getattr(hours, _DAY_NAMES[when.weekday()])


def _overnight(day: DayHours | None) -> bool:
    return day is not None and not day.is_closed and day.close < day.open


def is_open_at(hours: BusinessHours, when: datetime) -> bool:
    """Return whether the business is open at *when*.

    A closing time earlier than the opening time means the business closes
    after midnight, so the early hours of a day belong to the previous day's
    opening.
    """
    current = f"{when.hour:02d}:{when.minute:02d}"

    previous = hours_for_day(hours, when - timedelta(days=1))
    if _overnight(previous) and current <= previous.close:
        return True

    day = hours_for_day(hours, when)
    if day is None or day.is_closed:
        return False
    if _overnight(day):
        return current >= day.open
    return day.open <= current <= day.close
