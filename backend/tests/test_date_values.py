from __future__ import annotations

from datetime import date, datetime

import pytest

from projectboard.services.date_values import (
    NOT_APPLICABLE,
    PENDING,
    KnownDate,
    format_date_value,
    known_date,
    parse_date_value,
    serialize_date_value,
)


@pytest.mark.parametrize("raw", ["PENDING", "pending", " tbd "])
def test_parse_pending_tokens(raw):
    assert parse_date_value(raw) is PENDING


@pytest.mark.parametrize("raw", ["N/A", "na", "Not Applicable"])
def test_parse_not_applicable_tokens(raw):
    assert parse_date_value(raw) is NOT_APPLICABLE


def test_parse_dates_and_timestamps():
    assert parse_date_value("2024-06-30") == KnownDate(date(2024, 6, 30))
    assert parse_date_value("2024-06-30T10:15:00") == KnownDate(date(2024, 6, 30))
    assert parse_date_value(date(2024, 6, 30)) == KnownDate(date(2024, 6, 30))
    assert parse_date_value(datetime(2024, 6, 30, 10, 15)) == KnownDate(date(2024, 6, 30))


def test_parse_blank_values_as_unset():
    assert parse_date_value(None) is None
    assert parse_date_value("   ") is None


def test_parse_rejects_unknown_text():
    with pytest.raises(ValueError, match="Invalid date value"):
        parse_date_value("next week")


def test_known_date_only_returns_real_dates():
    assert known_date("2024-06-30") == date(2024, 6, 30)
    assert known_date("PENDING") is None
    assert known_date(None) is None


def test_format_and_serialize():
    assert format_date_value(KnownDate(date(2024, 6, 30))) == "2024-06-30"
    assert format_date_value(PENDING) == "PENDING"
    assert format_date_value(NOT_APPLICABLE) == "N/A"
    assert format_date_value(None) is None

    assert serialize_date_value("2024-06-30") == {"kind": "known", "value": date(2024, 6, 30)}
    assert serialize_date_value("tbd") == {"kind": "pending", "value": None}
    assert serialize_date_value("N/A") == {"kind": "not_applicable", "value": None}
    assert serialize_date_value("") is None
