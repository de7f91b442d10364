"""Lenient parsing of free-text exam dates stored on catches."""

from __future__ import annotations

from datetime import datetime

_EXAM_DATE_FORMATS: tuple[str, ...] = (
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%Y-%m-%d",
    "%d-%m-%Y %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)


def parse_exam_date(value: str | None) -> datetime | None:
    """Return the parsed exam date, or None when the text is not a recognisable date."""
    if not value:
        return None
    text = value.strip()
    if not text:
        return None

    for fmt in _EXAM_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)
