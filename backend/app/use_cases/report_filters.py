"""Validation of report query parameters (dates in dd-MM-yyyy, pagination)."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..config import settings
from ..domain_errors import validation_error

_REPORT_DATE_SHAPE = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}")


@dataclass(frozen=True)
class DateWindow:
    """Half-open datetime window [start, end)."""

    start: datetime
    end: datetime

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return (self.end - timedelta(days=1)).date()


def parse_report_date(value: str, *, field_name: str) -> date:
    """Strict dd-MM-yyyy: two-digit day and month, no surrounding whitespace."""
    try:
        if not _REPORT_DATE_SHAPE.fullmatch(value):
            raise ValueError(value)
        return datetime.strptime(value, settings.REPORT_DATE_FORMAT).date()
    except ValueError:
        raise validation_error(
            "INVALID_DATE_FORMAT",
            f"Invalid {field_name} format. Use dd-MM-yyyy.",
            field=field_name,
            value=value,
        ) from None


def _day_window(first_day: date, last_day: date) -> DateWindow:
    return DateWindow(
        start=datetime.combine(first_day, time.min),
        end=datetime.combine(last_day + timedelta(days=1), time.min),
    )


def resolve_production_window(
    *,
    date_value: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Optional[DateWindow]:
    """Window for volume reports; None means the whole event history.

    Every supplied value must parse. A single `date` wins over a start/end pair.
    """
    parsed_date = parse_report_date(date_value, field_name="date") if date_value else None
    parsed_start = parse_report_date(start_date, field_name="startDate") if start_date else None
    parsed_end = parse_report_date(end_date, field_name="endDate") if end_date else None

    if parsed_date is not None:
        return _day_window(parsed_date, parsed_date)
    if parsed_start is not None and parsed_end is not None:
        return _day_window(parsed_start, parsed_end)
    return None


def resolve_required_window(
    *,
    date_value: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> DateWindow:
    """Mandatory window: a single `date` or both `startDate` and `endDate` (end inclusive)."""
    if date_value:
        day = parse_report_date(date_value, field_name="date")
        return _day_window(day, day)
    if start_date and end_date:
        first_day = parse_report_date(start_date, field_name="startDate")
        last_day = parse_report_date(end_date, field_name="endDate")
        return _day_window(first_day, last_day)
    raise validation_error(
        "DATE_RANGE_REQUIRED",
        "Please provide either 'date' or both 'startDate' and 'endDate'.",
    )


def validate_pagination(*, page: int, page_size: int) -> int:
    """Reject non-positive values; returns page_size capped at MAX_PAGE_SIZE."""
    if page < 1 or page_size < 1:
        raise validation_error(
            "INVALID_PAGINATION",
            "page and page_size must be >= 1.",
            page=page,
            page_size=page_size,
        )
    return min(page_size, settings.MAX_PAGE_SIZE)


def format_report_date(value: date | datetime | None) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(settings.REPORT_DATE_FORMAT)
