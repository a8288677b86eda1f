"""Calendar router - FastAPI endpoints for the scheduling calendar"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...auth import get_current_user
from ...models import User
from ..orders.repository import OrderStore, get_order_store
from ..orders.schemas import Order
from .errors import DomainError, ErrorCode
from .schemas import CalendarEvent, EditBuffer, EventDetail, MonthView
from .service import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.ORDER_NOT_FOUND: 404,
    ErrorCode.WRITE_IN_PROGRESS: 409,
    ErrorCode.NO_PENDING_ARCHIVE: 400,
    ErrorCode.NO_SELECTED_EVENT: 400,
    ErrorCode.INVALID_EDIT: 400,
    ErrorCode.PERSISTENCE_FAILED: 502,
}


def get_calendar_service(store: OrderStore = Depends(get_order_store)) -> CalendarService:
    """Dependency injection for CalendarService"""
    return CalendarService(store)


def to_http_error(error: DomainError) -> HTTPException:
    status_code = STATUS_BY_CODE.get(error.code, 400)
    if status_code >= 500:
        logger.error(f"❌ Calendar request failed: {error}")
    return HTTPException(status_code=status_code, detail=error.message)


@router.get("/month", response_model=MonthView)
async def get_month(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Month grid (42 days, Sunday first) with each day's events"""
    return service.month(current_user, year, month)


@router.get("/events", response_model=list[CalendarEvent])
async def list_events(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """All upcoming and past events of active orders, in date order"""
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return service.list_events(current_user, start, end)


@router.get("/day/{day}", response_model=list[CalendarEvent])
async def get_day_events(
    day: date,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Events for the selected day"""
    return service.day_events(current_user, day)


@router.get("/events/{event_id}", response_model=EventDetail)
async def get_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Event detail with the editor's initial values"""
    try:
        return service.get_event(current_user, event_id)
    except DomainError as e:
        raise to_http_error(e) from e


@router.patch("/events/{event_id}", response_model=Order)
async def update_event(
    event_id: str,
    data: EditBuffer,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Save a changed date (and fitting notes) back into the event's order"""
    try:
        return await service.update_event(current_user, event_id, data)
    except DomainError as e:
        raise to_http_error(e) from e


@router.post("/events/{event_id}/archive", response_model=Order)
async def archive_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Archive the whole order behind an event; it disappears from the calendar"""
    try:
        return await service.archive_event(current_user, event_id)
    except DomainError as e:
        raise to_http_error(e) from e


@router.delete("/events/{event_id}")
async def remove_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: CalendarService = Depends(get_calendar_service),
):
    """Remove an event from view by archiving its order"""
    try:
        return await service.remove_event(current_user, event_id)
    except DomainError as e:
        raise to_http_error(e) from e
