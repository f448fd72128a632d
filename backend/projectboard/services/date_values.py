from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar

PENDING_TOKENS = {"PENDING", "TBD"}
NOT_APPLICABLE_TOKENS = {"N/A", "NA", "NOT APPLICABLE"}


@dataclass(frozen=True)
class KnownDate:
    value: date
    kind: ClassVar[str] = "known"


@dataclass(frozen=True)
class Pending:
    kind: ClassVar[str] = "pending"


@dataclass(frozen=True)
class NotApplicable:
    kind: ClassVar[str] = "not_applicable"


DateValue = KnownDate | Pending | NotApplicable

PENDING = Pending()
NOT_APPLICABLE = NotApplicable()


def parse_date_value(raw: DateValue | date | datetime | str | None) -> DateValue | None:
    """Normalize a date-or-status field into a tagged date value.

    ``None`` and blank strings mean the field is not set and return ``None``.
    Strings that are neither a status token nor an ISO date raise ``ValueError``.
    """
    if raw is None:
        return None
    if isinstance(raw, (KnownDate, Pending, NotApplicable)):
        return raw
    if isinstance(raw, datetime):
        return KnownDate(raw.date())
    if isinstance(raw, date):
        return KnownDate(raw)

    text = str(raw).strip()
    if not text:
        return None
    token = text.upper()
    if token in PENDING_TOKENS:
        return PENDING
    if token in NOT_APPLICABLE_TOKENS:
        return NOT_APPLICABLE
    try:
        return KnownDate(date.fromisoformat(text[:10]))
    except ValueError as exc:
        raise ValueError(f"Invalid date value: {text!r}") from exc


def known_date(raw: DateValue | date | datetime | str | None) -> date | None:
    value = parse_date_value(raw)
    if isinstance(value, KnownDate):
        return value.value
    return None


def format_date_value(value: DateValue | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, KnownDate):
        return value.value.isoformat()
    if isinstance(value, Pending):
        return "PENDING"
    return "N/A"


def serialize_date_value(raw: DateValue | date | datetime | str | None) -> dict[str, object] | None:
    value = parse_date_value(raw)
    if value is None:
        return None
    return {
        "kind": value.kind,
        "value": value.value if isinstance(value, KnownDate) else None,
    }
