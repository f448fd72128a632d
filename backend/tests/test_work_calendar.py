from __future__ import annotations

import calendar
from datetime import date

from projectboard.services.work_calendar import (
    count_working_days,
    is_business_day,
    nth_weekday_of_month,
    us_holidays,
)


def test_floating_holidays_2024():
    holidays = us_holidays(2024)

    assert holidays[date(2024, 1, 15)] == "Martin Luther King Jr. Day"
    assert holidays[date(2024, 5, 27)] == "Memorial Day"
    assert holidays[date(2024, 9, 2)] == "Labor Day"
    assert holidays[date(2024, 11, 28)] == "Thanksgiving"


def test_weekend_holidays_move_to_observed_weekday():
    # July 4th 2026 is a Saturday, Christmas 2022 a Sunday.
    assert date(2026, 7, 3) in us_holidays(2026)
    assert date(2022, 12, 26) in us_holidays(2022)


def test_nth_weekday_of_month_supports_last_occurrence():
    assert nth_weekday_of_month(2024, 5, calendar.MONDAY, -1) == date(2024, 5, 27)
    assert nth_weekday_of_month(2024, 11, calendar.THURSDAY, 4) == date(2024, 11, 28)


def test_is_business_day():
    assert is_business_day(date(2024, 1, 2))
    assert not is_business_day(date(2024, 1, 1))
    assert not is_business_day(date(2024, 1, 6))
    assert not is_business_day(None)


def test_count_working_days_is_inclusive_and_skips_holidays():
    assert count_working_days(date(2024, 1, 1), date(2024, 1, 5)) == 4
    assert count_working_days(date(2024, 1, 2), date(2024, 1, 2)) == 1
    assert count_working_days(date(2024, 1, 6), date(2024, 1, 7)) == 0


def test_count_working_days_without_valid_range():
    assert count_working_days(None, date(2024, 1, 5)) is None
    assert count_working_days(date(2024, 1, 5), date(2024, 1, 1)) is None
