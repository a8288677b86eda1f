"""
Event Detail Editor

Each event type keeps its date in a different place inside the order:

    pickup   -> order.dueDate (date only)
    wedding  -> bridalInfo.weddingDate of every bridal garment (date only)
    fitting  -> the fitting session with the event's session id (full
                timestamp) together with that session's notes

A save touches only that place. The order is copied before it is changed.
"""

import logging
from functools import singledispatch

from pydantic import TypeAdapter, ValidationError

from ...shared.dates import parse_local, to_input_value
from ..orders.schemas import Order
from .errors import InvalidEditError
from .schemas import CalendarEvent, EditBuffer, EventEdit, FittingEdit, PickupEdit, WeddingEdit

logger = logging.getLogger(__name__)

_edit_adapter = TypeAdapter(EventEdit)


def _find_session(order: Order, session_id: str):
    for garment in order.bridal_garments():
        for session in garment.garmentInfo.bridalInfo.fittingSessions:
            if session.id == session_id:
                return session
    return None


def initial_buffer(event: CalendarEvent, order: Order) -> EditBuffer:
    """
    Pre-populate the editor from the event's current state.

    The date is formatted from local components so the displayed time never
    shifts by the viewer's UTC offset.
    """
    notes = ""
    if event.type == "fitting":
        session = _find_session(order, event.fittingSessionId or "")
        notes = session.notes if session else ""
    else:
        notes = order.garments[0].garmentInfo.notes
    return EditBuffer(date=to_input_value(event.date), notes=notes)


def build_edit(event: CalendarEvent, buffer: EditBuffer) -> EventEdit:
    """Translate the editor buffer into the edit for this event's type"""
    try:
        edited = parse_local(buffer.date)
    except (ValueError, OverflowError) as e:
        raise InvalidEditError(f"Invalid date: {buffer.date!r}") from e

    payload = {"kind": event.type, "date": edited if event.type == "fitting" else edited.date()}
    if event.type == "fitting":
        if not event.fittingSessionId:
            raise InvalidEditError("Fitting event has no session")
        payload["sessionId"] = event.fittingSessionId
        payload["notes"] = buffer.notes

    try:
        return _edit_adapter.validate_python(payload)
    except ValidationError as e:
        raise InvalidEditError("Edit could not be applied to this event") from e


@singledispatch
def _apply(edit, order: Order) -> None:
    raise InvalidEditError(f"Unsupported edit: {type(edit).__name__}")


@_apply.register
def _(edit: PickupEdit, order: Order) -> None:
    order.dueDate = edit.date.isoformat()


@_apply.register
def _(edit: WeddingEdit, order: Order) -> None:
    # The wedding belongs to the occasion, so every bridal garment gets the same date
    for garment in order.bridal_garments():
        garment.garmentInfo.bridalInfo.weddingDate = edit.date.isoformat()


@_apply.register
def _(edit: FittingEdit, order: Order) -> None:
    session = _find_session(order, edit.sessionId)
    if session is None:
        raise InvalidEditError("Fitting session no longer exists")
    session.date = edit.date.isoformat()
    session.notes = edit.notes


def apply_edit(order: Order, edit: EventEdit) -> Order:
    """Return a changed copy of the order; the input order is left as is"""
    updated = order.model_copy(deep=True)
    _apply(edit, updated)
    logger.debug(f"✏️ Applied {edit.kind} edit to order {order.id}")
    return updated
