# restaurant/repos/category_repo.py
from sqlalchemy import exists, select
from sqlalchemy.orm import Session, selectinload

from restaurant.data.models.category import CategoryModel
from restaurant.data.models.product import ProductModel
from restaurant.repos.pagination import Page, paginate

SORTABLE = {
    "id": CategoryModel.id,
    "name": CategoryModel.name,
    "createdAt": CategoryModel.created_at,
    "updatedAt": CategoryModel.updated_at,
}


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self, per_page: int, sort_by: str, direction: str, page: int) -> Page:
        stmt = select(CategoryModel).options(selectinload(CategoryModel.products))
        return paginate(self.db, stmt, SORTABLE[sort_by], direction, per_page, page)

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel)
            .options(selectinload(CategoryModel.products))
            .where(CategoryModel.id == category_id)
        ).scalar_one_or_none()

    def exists(self, category_id: int) -> bool:
        return self.db.execute(
            select(exists().where(CategoryModel.id == category_id))
        ).scalar()

    def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        # "=" is case-sensitive on postgres and sqlite alike for ascii
        stmt = select(CategoryModel.id).where(CategoryModel.name == name)
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def has_products(self, category_id: int) -> bool:
        return self.db.execute(
            select(exists().where(ProductModel.category_id == category_id))
        ).scalar()

    def create_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update_category(self, category: CategoryModel, data: dict) -> CategoryModel:
        for field, value in data.items():
            setattr(category, field, value)
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete_category(self, category: CategoryModel) -> None:
        self.db.delete(category)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
