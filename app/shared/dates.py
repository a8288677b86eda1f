"""Date helpers shared by the order and calendar domains.

The calendar works in naive local wall-clock time. Stored values are either
bare dates ("2024-06-01"), local date-times ("2024-06-01T14:30") or UTC
timestamps written by older clients ("2024-06-01T19:30:00.000Z").
"""

from datetime import date, datetime

from dateutil import parser as date_parser
from dateutil import tz

from ..config import SHOP_TIMEZONE

INPUT_FORMAT = "%Y-%m-%dT%H:%M"


def shop_zone():
    """Zone used for local wall-clock time"""
    if SHOP_TIMEZONE:
        zone = tz.gettz(SHOP_TIMEZONE)
        if zone is not None:
            return zone
    return tz.tzlocal()


def parse_local(value: str) -> datetime:
    """
    Parse a stored date string into a naive local datetime.

    Raises:
        ValueError: If the value is blank or not an ISO 8601 date
    """
    if not value or not value.strip():
        raise ValueError("Empty date value")

    parsed = date_parser.isoparse(value.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(shop_zone()).replace(tzinfo=None)
    return parsed


def is_midnight(value: datetime) -> bool:
    return value.hour == 0 and value.minute == 0


def to_input_value(value: datetime) -> str:
    """Format as a datetime-local input value from local components"""
    return value.strftime(INPUT_FORMAT)


def date_only(value: datetime) -> str:
    return value.date().isoformat()


def same_day(value: datetime, day: date) -> bool:
    return (value.year, value.month, value.day) == (day.year, day.month, day.day)
