# restaurant/data/models/order_line.py
from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from restaurant.data.database import Base


class OrderLineModel(Base):
    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    # price snapshot taken when the order was placed, not the live product price
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
    product = relationship("ProductModel", back_populates="order_lines")

    @property
    def product_name(self) -> str | None:
        return self.product.name if self.product is not None else None

    @property
    def order_status(self) -> str | None:
        return self.order.status if self.order is not None else None
