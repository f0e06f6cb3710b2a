# restaurant/services/category_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from restaurant.data.models.category import CategoryModel
from restaurant.domain.exceptions import ConflictError, NotFoundError, ValidationError
from restaurant.domain.schemas import CategoryCreate, CategoryOut, CategoryUpdate, ListQuery
from restaurant.repos.category_repo import SORTABLE, CategoryRepo
from restaurant.services.cache_service import CacheService, item_key, list_key
from restaurant.services.notification_service import NotificationService
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

TAG = "categories"


class CategoryService:
    """
    Use cases of the category domain.
    queries (list, get) go through the cache, commands (create, update,
    delete) write to the database and then touch the cache and broadcast.
    """

    def __init__(self, db: Session, cache: CacheService, notifier: NotificationService):
        self.repo = CategoryRepo(db)
        self.cache = cache
        self.notifier = notifier

    def rollback(self) -> None:
        self.repo.rollback()

    #queries
    def list_categories(self, query: ListQuery) -> Dict[str, Any]:
        if query.sort_by not in SORTABLE:
            raise ValidationError("The selected sortBy is invalid.")

        key = list_key(TAG, query.per_page, query.sort_by, query.direction, query.page)
        data = self.cache.remember(TAG, key, lambda: self._load_page(query))

        self.notifier.listed("categories", {"categories": data["categories"]})
        return data

    def get_category(self, category_id: int) -> Dict[str, Any]:
        data = self.cache.remember(
            TAG,
            item_key("category", category_id),
            lambda: self._load_one(category_id),
        )
        if data is None:
            raise NotFoundError("Category not found.")
        return data

    #commands
    def create_category(self, payload: CategoryCreate) -> Dict[str, Any]:
        if self.repo.name_taken(payload.name):
            raise ValidationError("The category name has already been taken.")

        try:
            created = self.repo.create_category(CategoryModel(name=payload.name))
        except Exception as e:
            logger.error(f"Creating category {payload.name!r} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Created category {created.id}")

        self.cache.flush(TAG)

        data = CategoryOut.model_validate(created).to_json()
        self.notifier.created("category", {"category": data})
        return data

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Dict[str, Any]:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found.")

        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes:
            if changes["name"] is None:
                raise ValidationError("The name field must be a string.")
            if self.repo.name_taken(changes["name"], exclude_id=category_id):
                raise ValidationError("The category name has already been taken.")

        try:
            updated = self.repo.update_category(category, changes)
        except Exception as e:
            logger.error(f"Updating category {category_id} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Updated category {category_id}: {sorted(changes)}")

        data = CategoryOut.model_validate(updated).to_json()
        # only this item's key is overwritten, listings stay as they are until ttl
        self.cache.put(TAG, item_key("category", category_id), data)
        self.notifier.updated("category", {"category": data})
        return data

    def delete_category(self, category_id: int) -> None:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found.")

        if self.repo.has_products(category_id):
            raise ConflictError("The category has products and cannot be deleted.")

        try:
            self.repo.delete_category(category)
        except Exception as e:
            logger.error(f"Deleting category {category_id} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Deleted category {category_id}")
        self.cache.forget(TAG, item_key("category", category_id))

    def _load_page(self, query: ListQuery) -> Dict[str, Any]:
        page = self.repo.list_categories(query.per_page, query.sort_by, query.direction, query.page)
        return {
            "categories": [CategoryOut.model_validate(c).to_json() for c in page.items],
            "lastPage": page.last_page,
            "totalItems": page.total,
            "filter": query.to_json(),
        }

    def _load_one(self, category_id: int) -> Dict[str, Any] | None:
        category = self.repo.get_category(category_id)
        if not category:
            return None
        return CategoryOut.model_validate(category).to_json()
