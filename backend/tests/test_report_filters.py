from datetime import date, datetime

import pytest

from app.domain_errors import DomainError
from app.services.exam_dates import parse_exam_date
from app.use_cases.report_filters import (
    format_report_date,
    parse_report_date,
    resolve_production_window,
    resolve_required_window,
    validate_pagination,
)


def test_parse_report_date_accepts_only_day_month_year() -> None:
    assert parse_report_date("01-02-2024", field_name="date") == date(2024, 2, 1)

    with pytest.raises(DomainError, match="Invalid startDate format") as exc:
        parse_report_date("2024-02-01", field_name="startDate")
    assert exc.value.http_status == 400
    assert exc.value.code == "INVALID_DATE_FORMAT"


@pytest.mark.parametrize("raw", ["1-1-2024", "01-1-2024", " 01-01-2024", "01-01-2024 ", "01-01-24"])
def test_parse_report_date_rejects_loose_shapes(raw) -> None:
    with pytest.raises(DomainError) as exc:
        parse_report_date(raw, field_name="date")
    assert exc.value.code == "INVALID_DATE_FORMAT"
    assert exc.value.details["value"] == raw


def test_production_window_single_day_and_range() -> None:
    day = resolve_production_window(date_value="01-01-2024")
    assert day.start == datetime(2024, 1, 1)
    assert day.end == datetime(2024, 1, 2)

    span = resolve_production_window(start_date="01-01-2024", end_date="03-01-2024")
    assert span.first_day == date(2024, 1, 1)
    assert span.last_day == date(2024, 1, 3)
    assert span.end == datetime(2024, 1, 4)


def test_production_window_single_date_takes_precedence() -> None:
    window = resolve_production_window(
        date_value="10-01-2024",
        start_date="01-01-2024",
        end_date="31-01-2024",
    )

    assert window.first_day == window.last_day == date(2024, 1, 10)


def test_production_window_without_complete_filter_is_unbounded() -> None:
    assert resolve_production_window() is None
    assert resolve_production_window(start_date="01-01-2024") is None


def test_production_window_still_validates_unused_values() -> None:
    with pytest.raises(DomainError, match="endDate"):
        resolve_production_window(date_value="01-01-2024", end_date="bad")


def test_required_window_demands_date_or_full_range() -> None:
    with pytest.raises(DomainError) as exc:
        resolve_required_window(start_date="01-01-2024")
    assert exc.value.code == "DATE_RANGE_REQUIRED"
    assert exc.value.http_status == 400

    window = resolve_required_window(start_date="01-01-2024", end_date="02-01-2024")
    assert window.end == datetime(2024, 1, 3)


def test_pagination_validation() -> None:
    with pytest.raises(DomainError) as exc:
        validate_pagination(page=0, page_size=10)
    assert exc.value.code == "INVALID_PAGINATION"

    with pytest.raises(DomainError):
        validate_pagination(page=1, page_size=0)


def test_pagination_caps_large_page_size() -> None:
    assert validate_pagination(page=1, page_size=10) == 10
    assert validate_pagination(page=1, page_size=1000) == 500


def test_format_report_date() -> None:
    assert format_report_date(datetime(2024, 3, 5, 10, 30)) == "05-03-2024"
    assert format_report_date(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("05-03-2024", datetime(2024, 3, 5)),
        ("05/03/2024", datetime(2024, 3, 5)),
        ("2024-03-05", datetime(2024, 3, 5)),
        ("2024-03-05T08:15:00", datetime(2024, 3, 5, 8, 15)),
        (" 05.03.2024 ", datetime(2024, 3, 5)),
        ("TBD", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_exam_date(raw, expected) -> None:
    assert parse_exam_date(raw) == expected
