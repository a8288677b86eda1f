"""Calendar service - builds a controller per request from the stored orders"""

import logging
from datetime import date
from typing import Optional

from ...models import User
from ..orders.repository import OrderStore
from ..orders.schemas import Order
from ..orders.service import archived_copy
from .controller import CalendarController
from .events import events_between
from .grid import first_of_month
from .schemas import CalendarEvent, EditBuffer, EventDetail, MonthView

logger = logging.getLogger(__name__)


class CalendarService:
    """Service layer for calendar views and event changes"""

    def __init__(self, store: OrderStore):
        self.store = store

    def controller(self, user: User, reference: Optional[date] = None) -> CalendarController:
        orders = self.store.list_orders(user.id)

        async def save(order: Order) -> Order:
            return self.store.save_order(user.id, order)

        async def archive(order: Order) -> Order:
            return self.store.save_order(user.id, archived_copy(order))

        return CalendarController(
            orders, on_order_update=save, on_order_delete=archive, reference=reference
        )

    def month(self, user: User, year: Optional[int] = None, month: Optional[int] = None) -> MonthView:
        today = date.today()
        reference = date(year or today.year, month or today.month, 1)
        return self.controller(user, reference=first_of_month(reference)).month()

    def list_events(
        self, user: User, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[CalendarEvent]:
        return events_between(self.controller(user).events, start, end)

    def day_events(self, user: User, day: date) -> list[CalendarEvent]:
        return self.controller(user).select_day(day)

    def get_event(self, user: User, event_id: str) -> EventDetail:
        controller = self.controller(user)
        buffer = controller.open_event(event_id)
        return EventDetail(event=controller.selected_event, buffer=buffer)

    async def update_event(self, user: User, event_id: str, buffer: EditBuffer) -> Order:
        controller = self.controller(user)
        controller.open_event(event_id)
        return await controller.save_edit(buffer)

    async def archive_event(self, user: User, event_id: str) -> Order:
        controller = self.controller(user)
        controller.request_archive(event_id)
        return await controller.confirm_archive()

    async def remove_event(self, user: User, event_id: str) -> dict:
        """Archive the event's order as a removal from view"""
        controller = self.controller(user)
        controller.open_event(event_id)
        order = await controller.delete_selected()
        logger.info(f"🗑️ Order {order.id} removed from calendar by user {user.id}")
        return {"message": "Order archived", "orderId": order.id}
