"""Capture timestamp parsing and calendar helpers.

exiftool prints date/time tags in its own colon-separated layout
(``2023:07:04 15:08:09``), optionally with sub-seconds and a UTC offset.
The calendar helpers are pure functions of a date so they can be tested
against known fixtures independently of template rendering.
"""

import re
from datetime import date, datetime

# Locale-independent, indexed by date.weekday() (Monday == 0)
WEEKDAY_ABBREVIATIONS: tuple[str, ...] = (
    "Mon",
    "Tue",
    "Wed",
    "Thu",
    "Fri",
    "Sat",
    "Sun",
)

# YYYY:MM:DD HH:MM:SS[.fff][Z|+HH:MM|-HHMM]
EXIF_TIMESTAMP_PATTERN = re.compile(
    r"^(?P<year>\d{4}):(?P<month>\d{2}):(?P<day>\d{2})"
    r" (?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.\d+)?"
    r"(?:Z|[+-]\d{2}:?\d{2})?$",
    re.ASCII,
)


def parse_exif_timestamp(value: str) -> datetime:
    """Parse an exiftool date/time value.

    The UTC offset, if any, is dropped: the result is the wall-clock time
    at which the picture was taken.

    Args:
        value: Raw tag value (e.g., "2023:07:04 15:08:09+02:00").

    Returns:
        Naive datetime.

    Raises:
        ValueError: If the value does not match the exiftool layout or
            names an impossible date (including "0000:00:00 00:00:00").

    Examples:
        >>> parse_exif_timestamp("2023:09:08 18:56:54")
        datetime.datetime(2023, 9, 8, 18, 56, 54)
    """
    match = EXIF_TIMESTAMP_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Not an exif timestamp: {value!r}")
    parts = {name: int(text) for name, text in match.groupdict().items()}
    return datetime(**parts)


def iso_week_number(day: date) -> int:
    """Return the ISO-8601 week of the year (1-53)."""
    return day.isocalendar()[1]


def weekday_abbrev(day: date) -> str:
    """Return the three-letter English weekday name ("Mon" ... "Sun")."""
    return WEEKDAY_ABBREVIATIONS[day.weekday()]


def hour_12(hour: int) -> int:
    """Map a 24-hour clock hour to the 12-hour clock (0 -> 12, 13 -> 1)."""
    return hour % 12 or 12
