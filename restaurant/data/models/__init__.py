# import every model so SQLAlchemy registers it in Base.metadata

from restaurant.data.models.category import CategoryModel
from restaurant.data.models.product import ProductModel
from restaurant.data.models.order import OrderModel
from restaurant.data.models.order_line import OrderLineModel

__all__ = ["CategoryModel", "ProductModel", "OrderModel", "OrderLineModel"]
