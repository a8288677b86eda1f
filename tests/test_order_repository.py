"""Tests for the SQLAlchemy order store on an in-memory database."""

import pytest
from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.domain.orders.repository import SqlAlchemyOrderStore
from app.domain.orders.schemas import FittingSessionUpdate
from app.domain.orders.service import OrderService
from app.models import Order as OrderRow
from app.models import User


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    session.add(User(id=1, firebase_uid="uid-1", email="owner@shop.test"))
    session.commit()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def sql_store(db):
    return SqlAlchemyOrderStore(db)


def test_save_and_read_back(sql_store, bridal_order):
    sql_store.save_order(1, bridal_order)
    loaded = sql_store.get_order(1, "bride")
    assert loaded.clientInfo.name == "Jane Doe"
    assert loaded.garments == bridal_order.garments
    assert loaded.timeline == bridal_order.timeline


def test_unreadable_row_skipped_in_list(sql_store, db, make_order):
    sql_store.save_order(1, make_order(order_id="good"))
    sql_store.save_order(1, make_order(order_id="bad"))

    row = db.get(OrderRow, "bad")
    row.garments = [
        {
            "garmentInfo": {
                "type": "Wedding Dress",
                "bridalInfo": {"fittingSessions": [{"id": "f1", "date": None}]},
            }
        }
    ]
    db.commit()

    assert [o.id for o in sql_store.list_orders(1)] == ["good"]


def test_null_fitting_field_rejected_before_write(sql_store, bridal_order, user):
    sql_store.save_order(1, bridal_order)
    service = OrderService(sql_store)

    with pytest.raises(HTTPException) as exc_info:
        service.update_fitting_session(user, "bride", "f1", FittingSessionUpdate(date=None))
    assert exc_info.value.status_code == 400

    session = sql_store.get_order(1, "bride").garments[0].garmentInfo.bridalInfo.fittingSessions[0]
    assert session.date == "2024-08-01T10:00:00"
    assert [o.id for o in sql_store.list_orders(1)] == ["bride"]
