"""
Calendar Interaction Controller

Holds what the calendar screen has selected (day, open event, event waiting
for archive confirmation) and sends order changes to the order collaborator.
Local state only moves forward after a write succeeds.
"""

import logging
from datetime import date, datetime
from typing import Awaitable, Callable, Iterable, Optional

from ..orders.schemas import Order
from ..orders.service import archived_copy
from .editor import apply_edit, build_edit, initial_buffer
from .errors import (
    NoPendingArchiveError,
    NoSelectedEventError,
    OrderPersistenceError,
    WriteInProgressError,
)
from .events import derive_events, events_on, find_event, resolve_order
from .grid import first_of_month, month_view, shift_month
from .schemas import CalendarEvent, EditBuffer, MonthView

logger = logging.getLogger(__name__)

OrderCallback = Callable[[Order], Awaitable[object]]


class CalendarController:
    """Selection state and write mediation for one calendar session"""

    def __init__(
        self,
        orders: Optional[Iterable[Order]],
        on_order_update: OrderCallback,
        on_order_delete: Optional[OrderCallback] = None,
        reference: Optional[date] = None,
    ):
        self.orders: list[Order] = list(orders or [])
        self.on_order_update = on_order_update
        self.on_order_delete = on_order_delete
        self.reference_month = first_of_month(reference or date.today())

        self.selected_day: Optional[date] = None
        self.selected_event: Optional[CalendarEvent] = None
        self.pending_archive: Optional[CalendarEvent] = None
        self.is_saving = False
        self.error_message: Optional[str] = None
        self.is_editing = False

    def load(self, orders: Optional[Iterable[Order]]) -> None:
        """Replace the order list with the collaborator's reconciled copy"""
        self.orders = list(orders or [])

    @property
    def events(self) -> list[CalendarEvent]:
        return derive_events(self.orders)

    # Month navigation

    def month(self) -> MonthView:
        return month_view(self.reference_month, self.events)

    def next_month(self) -> MonthView:
        self.reference_month = shift_month(self.reference_month, 1)
        return self.month()

    def previous_month(self) -> MonthView:
        self.reference_month = shift_month(self.reference_month, -1)
        return self.month()

    # Selection

    def select_day(self, day: date) -> list[CalendarEvent]:
        self.selected_day = day
        return self.selected_day_events()

    def selected_day_events(self) -> list[CalendarEvent]:
        if self.selected_day is None:
            return []
        return events_on(self.events, self.selected_day)

    def open_event(self, event_id: str) -> EditBuffer:
        """Open the detail view; day selection is left alone"""
        event = find_event(self.events, event_id)
        order = resolve_order(event, self.orders)
        self.selected_event = event
        self.is_editing = False
        self.error_message = None
        return initial_buffer(event, order)

    def close_event(self) -> None:
        self.selected_event = None
        self.is_editing = False

    def begin_edit(self) -> None:
        if self.selected_event is None:
            raise NoSelectedEventError()
        self.is_editing = True

    def cancel_edit(self) -> None:
        self.is_editing = False

    # Archive

    def request_archive(self, event_id: str) -> CalendarEvent:
        self.pending_archive = find_event(self.events, event_id)
        return self.pending_archive

    def cancel_archive(self) -> None:
        self.pending_archive = None

    async def confirm_archive(self, now: Optional[datetime] = None) -> Order:
        if self.pending_archive is None:
            raise NoPendingArchiveError()

        order = resolve_order(self.pending_archive, self.orders)
        updated = archived_copy(order, now=now)

        await self._write(self.on_order_update, updated, "archive order")
        logger.info(f"🗄️ Order {order.id} archived from calendar event {self.pending_archive.id}")

        self.pending_archive = None
        self.selected_event = None
        self.is_editing = False
        return updated

    # Detail editor

    async def save_edit(self, buffer: EditBuffer) -> Order:
        """
        Emit the edited order whole, then leave edit mode.

        The detail view stays open on the event; a failed write keeps edit mode on.
        """
        if self.selected_event is None:
            raise NoSelectedEventError()

        event = self.selected_event
        order = resolve_order(event, self.orders)
        updated = apply_edit(order, build_edit(event, buffer))

        await self._write(self.on_order_update, updated, "save changes")
        logger.info(f"✏️ Saved {event.type} change for order {order.id}")
        self.is_editing = False
        return updated

    async def delete_selected(self) -> Order:
        """Hand the open event's order to the delete collaborator and close the view"""
        if self.selected_event is None:
            raise NoSelectedEventError()

        order = resolve_order(self.selected_event, self.orders)
        if self.on_order_delete is not None:
            await self._write(self.on_order_delete, order, "archive order")
        self.selected_event = None
        self.is_editing = False
        return order

    async def _write(self, callback: OrderCallback, order: Order, action: str) -> None:
        if self.is_saving:
            logger.warning(f"⚠️ Rejected duplicate submit for order {order.id}")
            raise WriteInProgressError()

        self.is_saving = True
        self.error_message = None
        try:
            await callback(order)
        except Exception as e:
            error = OrderPersistenceError(action)
            self.error_message = error.message
            logger.error(f"❌ Failed to {action} for order {order.id}: {e}")
            raise error from e
        finally:
            self.is_saving = False
