"""Calendar domain schemas - derived events, grid cells and edit variants"""

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

EventType = Literal["pickup", "wedding", "fitting"]


class CalendarEvent(BaseModel):
    """
    A schedulable moment derived from an order. Never persisted.

    The event refers to its source by id; edits look the order up again
    instead of holding on to a shared object.
    """

    id: str
    title: str
    date: datetime
    type: EventType
    clientName: str
    status: str
    orderId: str
    fittingSessionId: Optional[str] = None


class CalendarDay(BaseModel):
    date: date
    isCurrentMonth: bool
    events: list[CalendarEvent] = Field(default_factory=list)


class MonthView(BaseModel):
    label: str
    year: int
    month: int
    weekdays: list[str]
    days: list[CalendarDay]


class EditBuffer(BaseModel):
    """Values held by the detail editor while an event is being changed"""

    date: str  # YYYY-MM-DDTHH:MM, local time
    notes: str = ""


class EventDetail(BaseModel):
    event: CalendarEvent
    buffer: EditBuffer


class PickupEdit(BaseModel):
    kind: Literal["pickup"] = "pickup"
    date: date


class WeddingEdit(BaseModel):
    kind: Literal["wedding"] = "wedding"
    date: date


class FittingEdit(BaseModel):
    kind: Literal["fitting"] = "fitting"
    sessionId: str
    date: datetime
    notes: str = ""


EventEdit = Annotated[Union[PickupEdit, WeddingEdit, FittingEdit], Field(discriminator="kind")]
