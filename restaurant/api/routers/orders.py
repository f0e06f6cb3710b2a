# restaurant/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from restaurant.api.dependencies import get_cache, get_notifier, list_query
from restaurant.api.responses import envelope
from restaurant.data.database import get_db
from restaurant.domain.schemas import ListQuery, OrderCreate, OrderStatusUpdate
from restaurant.services.cache_service import CacheService
from restaurant.services.notification_service import NotificationService
from restaurant.services.order_service import OrderService
from restaurant.utils.retry import api_retry

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    notifier: NotificationService = Depends(get_notifier),
) -> OrderService:
    return OrderService(db=db, cache=cache, notifier=notifier)


@router.get("")
@api_retry()
def list_orders(
    query: ListQuery = Depends(list_query),
    svc: OrderService = Depends(get_service),
):
    return envelope(svc.list_orders(query))


@router.post("", status_code=201)
@api_retry()
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Places an order; every line carries the unit price at order time.
    The new order is always open.
    """
    return envelope({"order": svc.create_order(payload)}, status_code=201)


@router.get("/{order_id}")
@api_retry()
def get_order(order_id: int, svc: OrderService = Depends(get_service)):
    return envelope({"order": svc.get_order(order_id)})


@router.put("/{order_id}")
@api_retry()
def update_order(
    order_id: int,
    payload: OrderStatusUpdate,
    svc: OrderService = Depends(get_service),
):
    """Status-only update, checked against the order lifecycle."""
    return envelope({"order": svc.update_order_status(order_id, payload)})
