# restaurant/repos/product_repo.py
from sqlalchemy import exists, select
from sqlalchemy.orm import Session, selectinload

from restaurant.data.models.order_line import OrderLineModel
from restaurant.data.models.product import ProductModel
from restaurant.repos.pagination import Page, paginate

SORTABLE = {
    "id": ProductModel.id,
    "name": ProductModel.name,
    "price": ProductModel.price,
    "categoryId": ProductModel.category_id,
    "createdAt": ProductModel.created_at,
    "updatedAt": ProductModel.updated_at,
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, per_page: int, sort_by: str, direction: str, page: int) -> Page:
        stmt = select(ProductModel).options(selectinload(ProductModel.category))
        return paginate(self.db, stmt, SORTABLE[sort_by], direction, per_page, page)

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(
                selectinload(ProductModel.category),
                selectinload(ProductModel.order_lines).selectinload(OrderLineModel.order),
            )
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def existing_ids(self, product_ids) -> set[int]:
        ids = set(product_ids)
        if not ids:
            return set()
        rows = self.db.execute(select(ProductModel.id).where(ProductModel.id.in_(ids)))
        return {row[0] for row in rows}

    def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(ProductModel.id).where(ProductModel.name == name)
        if exclude_id is not None:
            stmt = stmt.where(ProductModel.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def has_order_lines(self, product_id: int) -> bool:
        return self.db.execute(
            select(exists().where(OrderLineModel.product_id == product_id))
        ).scalar()

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, data: dict) -> ProductModel:
        for field, value in data.items():
            setattr(product, field, value)
        self.db.commit()
        # category may have changed, reload it with the relationships
        self.db.expire(product)
        return self.get_product(product.id)

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
