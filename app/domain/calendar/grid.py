"""Month grid builder: 6 rows × 7 columns, weeks starting on Sunday"""

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from .events import events_on
from .schemas import CalendarDay, CalendarEvent, MonthView

GRID_SIZE = 42
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def first_of_month(reference: date) -> date:
    return date(reference.year, reference.month, 1)


def shift_month(reference: date, months: int) -> date:
    """Move by whole calendar months, pinned to day 1"""
    return first_of_month(reference) + relativedelta(months=months)


def month_label(reference: date) -> str:
    return f"{calendar.month_name[reference.month]} {reference.year}"


def build_month_grid(reference: date, events: list[CalendarEvent]) -> list[CalendarDay]:
    """
    Lay out the month containing `reference` as 42 day cells.

    Leading cells are the trailing days of the previous month, trailing cells
    the first days of the next month; both have isCurrentMonth=False.
    """
    first = first_of_month(reference)
    # date.weekday() is Monday=0; the grid starts on Sunday
    leading = (first.weekday() + 1) % 7
    days_in_month = calendar.monthrange(first.year, first.month)[1]
    start = first - timedelta(days=leading)

    days = []
    for offset in range(GRID_SIZE):
        day = start + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=day,
                isCurrentMonth=leading <= offset < leading + days_in_month,
                events=events_on(events, day),
            )
        )
    return days


def month_view(reference: date, events: list[CalendarEvent]) -> MonthView:
    first = first_of_month(reference)
    return MonthView(
        label=month_label(first),
        year=first.year,
        month=first.month,
        weekdays=WEEKDAY_LABELS,
        days=build_month_grid(first, events),
    )
