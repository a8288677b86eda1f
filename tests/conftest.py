"""Pytest fixtures for the alteration studio tests."""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.domain.orders.repository import OrderStore
from app.domain.orders.schemas import FittingSession, Order
from app.models import User


class InMemoryOrderStore(OrderStore):
    """Order store kept in a dict, optionally failing every write"""

    def __init__(self, orders=None):
        self.orders: dict[str, Order] = {o.id: o for o in orders or []}
        self.saved: list[Order] = []
        self.fail_writes = False

    def list_orders(self, user_id: int, limit: Optional[int] = None) -> list[Order]:
        orders = list(self.orders.values())
        return orders[:limit] if limit else orders

    def get_order(self, user_id: int, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    def save_order(self, user_id: int, order: Order) -> Order:
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        self.orders[order.id] = order
        self.saved.append(order)
        return order


def build_order(
    order_id: str = "o1",
    due_date: str = "2024-06-01",
    status: str = "pending",
    client_name: str = "Jane Doe",
    garment_types=("Pants",),
    wedding_date: Optional[str] = None,
    fittings: Optional[list[dict]] = None,
    bridal_garments: int = 1,
) -> Order:
    """
    Order with one garment per type. When a wedding date or fittings are given,
    the first `bridal_garments` garments carry bridal info.
    """
    garments = []
    bridal = wedding_date is not None or fittings is not None
    for index, garment_type in enumerate(garment_types):
        info = {"type": garment_type, "brand": "", "color": "", "notes": f"{garment_type} notes"}
        if bridal and index < bridal_garments:
            info["type"] = "Wedding Dress"
            info["bridalInfo"] = {
                "weddingDate": wedding_date or "",
                "fittingSessions": [dict(s) for s in (fittings or [])] if index == 0 else [],
            }
        garments.append({"garmentInfo": info})

    return Order(
        id=order_id,
        clientInfo={"name": client_name, "phone": "(555) 123-4567", "email": "jane@example.com"},
        garments=garments,
        paymentInfo={"totalAmount": 200, "depositAmount": 50, "paymentMethod": "card"},
        status=status,
        dueDate=due_date,
        timeline=[
            {
                "id": "t1",
                "type": "status_change",
                "timestamp": "2024-05-01T10:00:00",
                "description": "Order created",
            }
        ],
    )


@pytest.fixture
def make_order():
    return build_order


@pytest.fixture
def bridal_order():
    """Wedding dress order with two fittings, one completed"""
    return build_order(
        order_id="bride",
        due_date="2024-09-10",
        garment_types=("Wedding Dress",),
        wedding_date="2024-09-15",
        fittings=[
            {"id": "f1", "date": "2024-08-01T10:00:00", "type": "Initial", "completed": True},
            {"id": "f2", "date": "2024-08-20T15:30:00", "type": "Final", "notes": "hem"},
        ],
    )


@pytest.fixture
def two_dress_order():
    """Two bridal garments, each with its own fitting session"""
    order = build_order(
        order_id="pair",
        due_date="2024-09-10",
        garment_types=("Wedding Dress", "Wedding Dress"),
        wedding_date="2024-09-15",
        bridal_garments=2,
        fittings=[{"id": "a", "date": "2024-08-05T10:00:00", "type": "Initial"}],
    )
    order.garments[1].garmentInfo.bridalInfo.fittingSessions = [
        FittingSession(id="b", date="2024-08-05T10:00:00", type="Muslin")
    ]
    return order


@pytest.fixture
def store():
    return InMemoryOrderStore()


@pytest.fixture
def user():
    return User(id=1, firebase_uid="uid-1", email="owner@shop.test", full_name="Shop Owner")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def api_client(store, user):
    """Test client with authentication and the order store replaced"""
    from app.auth import get_current_user
    from app.domain.orders.repository import get_order_store
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_order_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
