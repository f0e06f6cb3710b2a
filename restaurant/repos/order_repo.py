# restaurant/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from restaurant.data.models.order import OrderModel
from restaurant.data.models.order_line import OrderLineModel
from restaurant.repos.pagination import Page, paginate

SORTABLE = {
    "id": OrderModel.id,
    "status": OrderModel.status,
    "totalPrice": OrderModel.total_price,
    "createdAt": OrderModel.created_at,
    "updatedAt": OrderModel.updated_at,
}


def _with_lines():
    return selectinload(OrderModel.lines).selectinload(OrderLineModel.product)


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_orders(self, per_page: int, sort_by: str, direction: str, page: int) -> Page:
        stmt = select(OrderModel).options(_with_lines())
        return paginate(self.db, stmt, SORTABLE[sort_by], direction, per_page, page)

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).options(_with_lines()).where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def create_order(self, order: OrderModel) -> OrderModel:
        """Order and all of its lines go in with a single commit."""
        self.db.add(order)
        self.db.commit()
        return self.get_order(order.id)

    def update_order_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        self.db.commit()
        self.db.refresh(order)
        return order

    def rollback(self) -> None:
        self.db.rollback()
