"""
Calendar Event Deriver

Turns the order list into one chronologically sorted list of pickup, wedding
and fitting events. Runs on every read; nothing here is cached or stored.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ...config import PICKUP_DEFAULT_HOUR, WEDDING_DEFAULT_HOUR
from ...shared.dates import is_midnight, parse_local, same_day
from ..orders.schemas import Order
from .errors import EventNotFoundError, OrderNotFoundError
from .schemas import CalendarEvent

logger = logging.getLogger(__name__)


def _with_default_hour(value: datetime, hour: int) -> datetime:
    # Midnight means the stored value was a bare date
    if is_midnight(value):
        return value.replace(hour=hour, minute=0, second=0, microsecond=0)
    return value


def _fitting_title(session) -> str:
    if session.type == "Custom" and session.customType:
        return f"{session.customType} Fitting"
    return f"{session.type} Fitting"


def _order_events(order: Order) -> list[CalendarEvent]:
    events = []
    client_name = order.clientInfo.name

    try:
        pickup_date = _with_default_hour(parse_local(order.dueDate), PICKUP_DEFAULT_HOUR)
        events.append(
            CalendarEvent(
                id=f"pickup-{order.id}",
                title=f"Pickup: {', '.join(g.garmentInfo.type for g in order.garments)}",
                date=pickup_date,
                type="pickup",
                clientName=client_name,
                status=order.status,
                orderId=order.id,
            )
        )
    except (ValueError, OverflowError):
        logger.warning(f"⚠️ Skipping pickup for order {order.id}: bad due date {order.dueDate!r}")

    # Sessions are numbered across the whole order so ids stay unique
    session_number = -1
    for garment in order.bridal_garments():
        bridal_info = garment.garmentInfo.bridalInfo

        if bridal_info.weddingDate:
            try:
                wedding_date = _with_default_hour(
                    parse_local(bridal_info.weddingDate), WEDDING_DEFAULT_HOUR
                )
                events.append(
                    CalendarEvent(
                        id=f"wedding-{order.id}",
                        title="Wedding Day",
                        date=wedding_date,
                        type="wedding",
                        clientName=client_name,
                        status=order.status,
                        orderId=order.id,
                    )
                )
            except (ValueError, OverflowError):
                logger.warning(
                    f"⚠️ Skipping wedding for order {order.id}: bad date {bridal_info.weddingDate!r}"
                )

        for session in bridal_info.fittingSessions:
            session_number += 1
            if not session.date:
                continue
            try:
                events.append(
                    CalendarEvent(
                        id=f"fitting-{order.id}-{session_number}",
                        title=_fitting_title(session),
                        date=parse_local(session.date),
                        type="fitting",
                        clientName=client_name,
                        status="completed" if session.completed else "pending",
                        orderId=order.id,
                        fittingSessionId=session.id,
                    )
                )
            except (ValueError, OverflowError):
                logger.warning(
                    f"⚠️ Skipping fitting {session.id} for order {order.id}: bad date {session.date!r}"
                )

    return events


def derive_events(orders: Optional[Iterable[Order]]) -> list[CalendarEvent]:
    """
    Derive calendar events from orders.

    Archived orders contribute nothing. An event whose stored date cannot be
    parsed is skipped; the rest of the order list still renders.
    """
    if orders is None:
        return []

    events: list[CalendarEvent] = []
    for order in orders:
        if order.is_archived:
            continue
        events.extend(_order_events(order))

    # list.sort is stable, so same-time events keep derivation order
    events.sort(key=lambda event: event.date)
    return events


def find_event(events: Iterable[CalendarEvent], event_id: str) -> CalendarEvent:
    for event in events:
        if event.id == event_id:
            return event
    raise EventNotFoundError(event_id)


def events_on(events: Iterable[CalendarEvent], day: date) -> list[CalendarEvent]:
    """Events whose calendar date matches the day, time ignored"""
    return [event for event in events if same_day(event.date, day)]


def events_between(
    events: Iterable[CalendarEvent], start: Optional[date] = None, end: Optional[date] = None
) -> list[CalendarEvent]:
    """Events within an inclusive date range; either bound may be open"""
    return [
        event
        for event in events
        if (start is None or event.date.date() >= start) and (end is None or event.date.date() <= end)
    ]


def resolve_order(event: CalendarEvent, orders: Iterable[Order]) -> Order:
    """Look up the event's source order in the current order list"""
    for order in orders:
        if order.id == event.orderId:
            return order
    raise OrderNotFoundError(event.orderId)
