from __future__ import annotations

import calendar
from datetime import date, timedelta
from functools import lru_cache

FIXED_HOLIDAYS = {
    (1, 1): "New Year's Day",
    (7, 4): "Independence Day",
    (11, 11): "Veterans Day",
    (12, 25): "Christmas Day",
}

# (month, weekday, occurrence, name); occurrence -1 means the last one in the month.
FLOATING_HOLIDAYS = (
    (1, calendar.MONDAY, 3, "Martin Luther King Jr. Day"),
    (2, calendar.MONDAY, 3, "Presidents' Day"),
    (5, calendar.MONDAY, -1, "Memorial Day"),
    (9, calendar.MONDAY, 1, "Labor Day"),
    (10, calendar.MONDAY, 2, "Columbus Day"),
    (11, calendar.THURSDAY, 4, "Thanksgiving"),
)


def nth_weekday_of_month(year: int, month: int, weekday: int, occurrence: int) -> date:
    if occurrence < 0:
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        return last_day - timedelta(days=(last_day.weekday() - weekday) % 7)
    first_day = date(year, month, 1)
    offset = (weekday - first_day.weekday()) % 7
    return first_day + timedelta(days=offset + (occurrence - 1) * 7)


def _observed(holiday: date) -> date:
    if holiday.weekday() == calendar.SATURDAY:
        return holiday - timedelta(days=1)
    if holiday.weekday() == calendar.SUNDAY:
        return holiday + timedelta(days=1)
    return holiday


@lru_cache(maxsize=64)
def us_holidays(year: int) -> dict[date, str]:
    holidays: dict[date, str] = {}
    for (month, day), name in FIXED_HOLIDAYS.items():
        holidays[_observed(date(year, month, day))] = name
    for month, weekday, occurrence, name in FLOATING_HOLIDAYS:
        holidays[nth_weekday_of_month(year, month, weekday, occurrence)] = name
    return holidays


def is_business_day(value: date | None) -> bool:
    if value is None:
        return False
    if value.weekday() >= calendar.SATURDAY:
        return False
    return value not in us_holidays(value.year)


def count_working_days(start: date | None, end: date | None) -> int | None:
    """Count weekdays between ``start`` and ``end`` (inclusive) that are not US holidays."""
    if start is None or end is None or start > end:
        return None
    working_days = 0
    current = start
    while current <= end:
        if is_business_day(current):
            working_days += 1
        current += timedelta(days=1)
    return working_days
