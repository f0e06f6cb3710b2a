# restaurant/services/order_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from restaurant.data.models.order import OrderModel
from restaurant.data.models.order_line import OrderLineModel
from restaurant.domain.exceptions import NotFoundError, TransitionRejected, ValidationError
from restaurant.domain.order_status import INITIAL_STATUS, compute_total, transition
from restaurant.domain.schemas import MONEY_MAX, ListQuery, OrderCreate, OrderOut, OrderStatusUpdate
from restaurant.repos.order_repo import SORTABLE, OrderRepo
from restaurant.repos.product_repo import ProductRepo
from restaurant.services.cache_service import CacheService, item_key, list_key
from restaurant.services.notification_service import NotificationService
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

TAG = "orders"


class OrderService:
    """
    Service for the order domain.
    Orders are created open with their total fixed from the lines sent;
    afterwards only the status moves, and only along the lifecycle rules.
    """

    def __init__(self, db: Session, cache: CacheService, notifier: NotificationService):
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.cache = cache
        self.notifier = notifier

    def rollback(self) -> None:
        # the repos share one session
        self.repo.rollback()

    def list_orders(self, query: ListQuery) -> Dict[str, Any]:
        if query.sort_by not in SORTABLE:
            raise ValidationError("The selected sortBy is invalid.")

        key = list_key(TAG, query.per_page, query.sort_by, query.direction, query.page)
        data = self.cache.remember(TAG, key, lambda: self._load_page(query))

        self.notifier.listed("orders", {"orders": data["orders"]})
        return data

    def get_order(self, order_id: int) -> Dict[str, Any]:
        data = self.cache.remember(
            TAG,
            item_key("order", order_id),
            lambda: self._load_one(order_id),
        )
        if data is None:
            raise NotFoundError("Order not found.")
        return data

    def create_order(self, payload: OrderCreate) -> Dict[str, Any]:
        """
        Use case: place an order.

        1. every line must point at an existing product
        2. total = sum of unit_price * quantity, prices as sent, within the column limit
        3. order and lines are written in one transaction
        4. cache tag flushed, event broadcast
        """
        known = self.products.existing_ids(line.product_id for line in payload.lines)
        for line in payload.lines:
            if line.product_id not in known:
                raise ValidationError("The selected product does not exist.")

        total = compute_total(payload.lines)
        if total > MONEY_MAX:
            raise ValidationError(f"The order total may not be greater than {MONEY_MAX}.")

        order = OrderModel(
            status=INITIAL_STATUS.value,
            total_price=total,
            lines=[
                OrderLineModel(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for line in payload.lines
            ],
        )

        try:
            created = self.repo.create_order(order)
        except Exception as e:
            logger.error(f"Creating order failed, nothing written: {e}")
            self.repo.rollback()
            raise

        logger.info(
            f"Order {created.id} created with {len(created.lines)} line(s), total {created.total_price}"
        )

        self.cache.flush(TAG)

        data = OrderOut.model_validate(created).to_json()
        self.notifier.created("order", {"order": data})
        return data

    def update_order_status(self, order_id: int, payload: OrderStatusUpdate) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found.")

        try:
            new_status = transition(order.status, payload.status)
        except TransitionRejected as e:
            logger.info(f"Order {order_id}: {order.status} -> {payload.status.value} rejected ({e.message})")
            raise

        previous = order.status
        try:
            updated = self.repo.update_order_status(order, new_status.value)
        except Exception as e:
            logger.error(f"Updating order {order_id} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id}: {previous} -> {updated.status}")

        data = OrderOut.model_validate(updated).to_json()
        self.cache.put(TAG, item_key("order", order_id), data)
        self.notifier.updated("order", {"order": data})
        return data

    def _load_page(self, query: ListQuery) -> Dict[str, Any]:
        page = self.repo.list_orders(query.per_page, query.sort_by, query.direction, query.page)
        return {
            "orders": [OrderOut.model_validate(o).to_json() for o in page.items],
            "lastPage": page.last_page,
            "totalItems": page.total,
            "filter": query.to_json(),
        }

    def _load_one(self, order_id: int) -> Dict[str, Any] | None:
        order = self.repo.get_order(order_id)
        if not order:
            return None
        return OrderOut.model_validate(order).to_json()
