"""Order router - FastAPI endpoints for order operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...auth import get_current_user
from ...models import User
from .repository import OrderStore, get_order_store
from .schemas import FittingSession, FittingSessionUpdate, Order, OrderListResponse
from .service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(store: OrderStore = Depends(get_order_store)) -> OrderService:
    """Dependency injection for OrderService"""
    return OrderService(store)


@router.get("", response_model=OrderListResponse)
async def get_orders(
    show_archived: bool = Query(False),
    status: Optional[str] = Query(None),
    q: Optional[str] = Query(None, max_length=200),
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Most recent orders for the current user, soonest due first"""
    return service.list_orders(current_user, show_archived=show_archived, status=status, q=q)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.get_order(current_user, order_id)


@router.put("/{order_id}", response_model=Order)
async def save_order(
    order_id: str,
    data: Order,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Replace the whole order aggregate"""
    if data.id != order_id:
        raise HTTPException(status_code=400, detail="Order ID mismatch")
    return service.save_order(current_user, data)


@router.post("/{order_id}/archive", response_model=Order)
async def archive_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Archive an order (hidden from active views; cannot be undone)"""
    return service.archive_order(current_user, order_id)


@router.get("/{order_id}/next-fitting", response_model=Optional[FittingSession])
async def get_next_fitting(
    order_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Earliest scheduled fitting that is not completed"""
    return service.get_next_fitting(current_user, order_id)


@router.post("/{order_id}/garments/{garment_index}/fittings", response_model=Order)
async def add_fitting_session(
    order_id: str,
    garment_index: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.add_fitting_session(current_user, order_id, garment_index)


@router.patch("/{order_id}/fittings/{session_id}", response_model=Order)
async def update_fitting_session(
    order_id: str,
    session_id: str,
    data: FittingSessionUpdate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.update_fitting_session(current_user, order_id, session_id, data)


@router.delete("/{order_id}/fittings/{session_id}", response_model=Order)
async def remove_fitting_session(
    order_id: str,
    session_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.remove_fitting_session(current_user, order_id, session_id)
