"""Order repository - the persistence collaborator consumed by the calendar core.

Stores must be swappable and exchange whole order aggregates.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session, joinedload

from ...database import get_db
from ...models import Client
from ...models import Order as OrderRow
from .schemas import ClientInfo, Order

logger = logging.getLogger(__name__)


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def list_orders(self, user_id: int, limit: Optional[int] = None) -> list[Order]:
        """Return the user's orders, most recently created first."""
        ...

    @abstractmethod
    def get_order(self, user_id: int, order_id: str) -> Optional[Order]:
        """Return an order by ID, or None if not found."""
        ...

    @abstractmethod
    def save_order(self, user_id: int, order: Order) -> Order:
        """Persist the whole aggregate, overwriting any stored version."""
        ...


class SqlAlchemyOrderStore(OrderStore):
    """Database-backed order store"""

    def __init__(self, db: Session):
        self.db = db

    def list_orders(self, user_id: int, limit: Optional[int] = None) -> list[Order]:
        query = (
            self.db.query(OrderRow)
            .options(joinedload(OrderRow.client))
            .filter(OrderRow.user_id == user_id)
            .order_by(OrderRow.created_at.desc())
        )
        if limit:
            query = query.limit(limit)

        orders = []
        for row in query.all():
            try:
                orders.append(self._to_schema(row))
            except ValidationError as e:
                # One unreadable order must not take down the whole list
                logger.warning(f"⚠️ Skipping order {row.id}: stored data is invalid ({e.error_count()} errors)")
        return orders

    def get_order(self, user_id: int, order_id: str) -> Optional[Order]:
        row = self._get_row(user_id, order_id)
        return self._to_schema(row) if row else None

    def save_order(self, user_id: int, order: Order) -> Order:
        row = self._get_row(user_id, order.id)
        if row is None:
            row = OrderRow(id=order.id, user_id=user_id)
            self.db.add(row)

        row.client = self._resolve_client(user_id, row.client, order.clientInfo)
        row.description = order.description
        row.status = order.status
        row.due_date = order.dueDate
        row.garments = [g.model_dump() for g in order.garments]
        row.payment_info = order.paymentInfo.model_dump()
        row.event_info = order.eventInfo
        row.timeline = [t.model_dump() for t in order.timeline]
        row.updated_at = datetime.now()

        self.db.commit()
        self.db.refresh(row)
        logger.info(f"💾 Order {order.id} saved (status={order.status})")
        return self._to_schema(row)

    def _get_row(self, user_id: int, order_id: str) -> Optional[OrderRow]:
        return (
            self.db.query(OrderRow)
            .options(joinedload(OrderRow.client))
            .filter(OrderRow.id == order_id, OrderRow.user_id == user_id)
            .first()
        )

    def _resolve_client(
        self, user_id: int, current: Optional[Client], info: ClientInfo
    ) -> Client:
        if current is not None:
            current.name = info.name
            current.phone = info.phone
            current.email = info.email
            current.carrier = info.carrier
            return current

        query = self.db.query(Client).filter(Client.user_id == user_id, Client.name == info.name)
        if info.phone:
            query = query.filter(Client.phone == info.phone)
        client = query.first()
        if client is None:
            client = Client(
                user_id=user_id,
                name=info.name,
                phone=info.phone,
                email=info.email,
                carrier=info.carrier,
            )
            self.db.add(client)
        return client

    @staticmethod
    def _to_schema(row: OrderRow) -> Order:
        client = row.client
        return Order(
            id=row.id,
            clientInfo={
                "name": client.name if client else "",
                "phone": (client.phone if client else "") or "",
                "email": (client.email if client else "") or "",
                "carrier": (client.carrier if client else "other") or "other",
            },
            garments=row.garments or [],
            paymentInfo=row.payment_info or {},
            description=row.description or "",
            status=row.status,
            dueDate=row.due_date,
            createdAt=row.created_at,
            updatedAt=row.updated_at,
            timeline=row.timeline or [],
            eventInfo=row.event_info,
        )


def get_order_store(db: Session = Depends(get_db)) -> OrderStore:
    """Dependency injection for the order store"""
    return SqlAlchemyOrderStore(db)
