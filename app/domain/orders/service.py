"""Order service - Business logic for order operations"""

import logging
import time
import uuid
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from pydantic import ValidationError

from ...config import ORDERS_PAGE_SIZE
from ...models import User
from ...shared.dates import parse_local
from .repository import OrderStore
from .schemas import (
    ARCHIVED,
    FittingSession,
    FittingSessionUpdate,
    Order,
    OrderListResponse,
    TimelineEntry,
)

logger = logging.getLogger(__name__)


def archived_copy(order: Order, now: Optional[datetime] = None) -> Order:
    """
    Return a copy of the order moved to the terminal archived status.

    Exactly one status_change entry is appended to the timeline.
    """
    now = now or datetime.now()
    entry = TimelineEntry(
        id=uuid.uuid4().hex,
        type="status_change",
        timestamp=now.isoformat(),
        description="Order archived",
    )
    updated = order.model_copy(deep=True)
    updated.status = ARCHIVED
    updated.timeline.append(entry)
    return updated


def new_fitting_session() -> FittingSession:
    """Blank session as created by the "Add Fitting" action"""
    return FittingSession(id=str(int(time.time() * 1000)), date="", type="Initial")


def next_fitting(order: Order) -> Optional[FittingSession]:
    """Earliest scheduled fitting that is not completed yet"""
    upcoming = []
    for garment in order.bridal_garments():
        for session in garment.garmentInfo.bridalInfo.fittingSessions:
            if session.completed or not session.date:
                continue
            try:
                upcoming.append((parse_local(session.date), session))
            except ValueError:
                logger.warning(f"⚠️ Skipping fitting {session.id} with bad date: {session.date!r}")
    if not upcoming:
        return None
    upcoming.sort(key=lambda pair: pair[0])
    return upcoming[0][1]


def matches_search(order: Order, query: str) -> bool:
    needle = query.strip().lower()
    if needle in order.clientInfo.name.lower():
        return True
    return any(needle in g.garmentInfo.type.lower() for g in order.garments)


def due_sort_key(order: Order):
    # Unparseable due dates sort last
    try:
        return (0, parse_local(order.dueDate))
    except (ValueError, OverflowError):
        return (1, datetime.max)


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, store: OrderStore):
        self.store = store

    def list_orders(
        self,
        user: User,
        show_archived: bool = False,
        status: Optional[str] = None,
        q: Optional[str] = None,
    ) -> OrderListResponse:
        """
        Most recent orders, soonest due first.

        Archived orders are hidden unless requested. `q` matches the client
        name or any garment type, case-insensitively.
        """
        orders = self.store.list_orders(user.id, limit=ORDERS_PAGE_SIZE)
        archived_count = sum(1 for o in orders if o.is_archived)

        visible = [o for o in orders if show_archived or not o.is_archived]
        if status and status != "all":
            visible = [o for o in visible if o.status == status]
        if q and q.strip():
            visible = [o for o in visible if matches_search(o, q)]

        visible.sort(key=due_sort_key)
        return OrderListResponse(orders=visible, total=len(visible), archivedCount=archived_count)

    def get_order(self, user: User, order_id: str) -> Order:
        order = self.store.get_order(user.id, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    def save_order(self, user: User, order: Order) -> Order:
        """Full-aggregate overwrite; last write wins"""
        updated = order.model_copy(update={"updatedAt": datetime.now()})
        return self.store.save_order(user.id, updated)

    def archive_order(self, user: User, order_id: str) -> Order:
        order = self.get_order(user, order_id)
        if order.is_archived:
            raise HTTPException(status_code=400, detail="Order is already archived")

        logger.info(f"🗄️ Archiving order {order_id} for user {user.id}")
        return self.save_order(user, archived_copy(order))

    def get_next_fitting(self, user: User, order_id: str) -> Optional[FittingSession]:
        return next_fitting(self.get_order(user, order_id))

    def add_fitting_session(self, user: User, order_id: str, garment_index: int) -> Order:
        order = self.get_order(user, order_id).model_copy(deep=True)

        if garment_index < 0 or garment_index >= len(order.garments):
            raise HTTPException(status_code=404, detail="Garment not found")

        bridal_info = order.garments[garment_index].garmentInfo.bridalInfo
        if bridal_info is None:
            raise HTTPException(
                status_code=400, detail="Fitting sessions are only available for bridal garments"
            )

        session = new_fitting_session()
        bridal_info.fittingSessions.append(session)
        logger.info(f"➕ Added fitting session {session.id} to order {order_id}")
        return self.save_order(user, order)

    def update_fitting_session(
        self, user: User, order_id: str, session_id: str, updates: FittingSessionUpdate
    ) -> Order:
        order = self.get_order(user, order_id).model_copy(deep=True)
        changes = updates.model_dump(exclude_unset=True)

        found = False
        for garment in order.bridal_garments():
            sessions = garment.garmentInfo.bridalInfo.fittingSessions
            for index, session in enumerate(sessions):
                if session.id == session_id:
                    try:
                        sessions[index] = FittingSession.model_validate(
                            {**session.model_dump(), **changes, "id": session.id}
                        )
                    except ValidationError as e:
                        logger.warning(f"⚠️ Rejected fitting update for {session_id}: {e.errors()}")
                        raise HTTPException(status_code=400, detail="Invalid fitting session update") from e
                    found = True

        if not found:
            raise HTTPException(status_code=404, detail="Fitting session not found")
        return self.save_order(user, order)

    def remove_fitting_session(self, user: User, order_id: str, session_id: str) -> Order:
        order = self.get_order(user, order_id).model_copy(deep=True)

        removed = 0
        for garment in order.bridal_garments():
            bridal_info = garment.garmentInfo.bridalInfo
            before = len(bridal_info.fittingSessions)
            bridal_info.fittingSessions = [
                s for s in bridal_info.fittingSessions if s.id != session_id
            ]
            removed += before - len(bridal_info.fittingSessions)

        if not removed:
            raise HTTPException(status_code=404, detail="Fitting session not found")
        logger.info(f"➖ Removed fitting session {session_id} from order {order_id}")
        return self.save_order(user, order)
