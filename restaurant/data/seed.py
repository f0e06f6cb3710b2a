# restaurant/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant.data.database import SessionLocal, init_db
from restaurant.data.models import CategoryModel, OrderLineModel, OrderModel, ProductModel
from restaurant.domain.order_status import INITIAL_STATUS, compute_total
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

MENU = {
    "Pizza": [("Margherita", "10.00"), ("Pepperoni", "12.50"), ("Quattro Formaggi", "13.00")],
    "Drinks": [("Lemonade", "3.50"), ("Espresso", "2.20")],
    "Desserts": [("Tiramisu", "6.00")],
}


def seed(db: Session) -> bool:
    """Fill an empty database with a demo menu and one open order.

    Returns False when there is already data and nothing was written.
    """
    # not forcing: only seed if empty
    if db.execute(select(CategoryModel.id).limit(1)).first():
        return False

    products = []
    for category_name, items in MENU.items():
        category = CategoryModel(name=category_name)
        for name, price in items:
            product = ProductModel(name=name, price=Decimal(price))
            category.products.append(product)
            products.append(product)
        db.add(category)
    db.flush()

    lines = [
        OrderLineModel(product_id=products[0].id, quantity=2, unit_price=products[0].price),
        OrderLineModel(product_id=products[3].id, quantity=1, unit_price=products[3].price),
    ]
    db.add(OrderModel(status=INITIAL_STATUS.value, total_price=compute_total(lines), lines=lines))
    db.commit()

    logger.info(f"Seeded {len(MENU)} categories, {len(products)} products and 1 order")
    return True


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
