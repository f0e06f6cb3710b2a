# restaurant/services/product_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from restaurant.data.models.product import ProductModel
from restaurant.domain.exceptions import ConflictError, NotFoundError, ValidationError
from restaurant.domain.schemas import ListQuery, ProductCreate, ProductDetailOut, ProductOut, ProductUpdate
from restaurant.repos.category_repo import CategoryRepo
from restaurant.repos.product_repo import SORTABLE, ProductRepo
from restaurant.services.cache_service import CacheService, item_key, list_key
from restaurant.services.notification_service import NotificationService
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

TAG = "products"

_FIELD_NAMES = {"category_id": "categoryId", "name": "name", "price": "price"}


class ProductService:
    """Use cases of the product domain, same read/write split as categories."""

    def __init__(self, db: Session, cache: CacheService, notifier: NotificationService):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)
        self.cache = cache
        self.notifier = notifier

    def rollback(self) -> None:
        # the repos share one session
        self.repo.rollback()

    #queries
    def list_products(self, query: ListQuery) -> Dict[str, Any]:
        if query.sort_by not in SORTABLE:
            raise ValidationError("The selected sortBy is invalid.")

        key = list_key(TAG, query.per_page, query.sort_by, query.direction, query.page)
        data = self.cache.remember(TAG, key, lambda: self._load_page(query))

        self.notifier.listed("products", {"products": data["products"]})
        return data

    def get_product(self, product_id: int) -> Dict[str, Any]:
        data = self.cache.remember(
            TAG,
            item_key("product", product_id),
            lambda: self._load_one(product_id),
        )
        if data is None:
            raise NotFoundError("Product not found.")
        return data

    #commands
    def create_product(self, payload: ProductCreate) -> Dict[str, Any]:
        if not self.categories.exists(payload.category_id):
            raise ValidationError("The selected category does not exist.")

        if self.repo.name_taken(payload.name):
            raise ValidationError("The product name has already been taken.")

        try:
            created = self.repo.create_product(
                ProductModel(
                    category_id=payload.category_id,
                    name=payload.name,
                    price=payload.price,
                )
            )
        except Exception as e:
            logger.error(f"Creating product {payload.name!r} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Created product {created.id} in category {created.category_id}")

        self.cache.flush(TAG)

        data = ProductOut.model_validate(created).to_json()
        self.notifier.created("product", {"product": data})
        return data

    def update_product(self, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                raise ValidationError(f"The {_FIELD_NAMES[field]} field may not be null.")

        if "category_id" in changes and not self.categories.exists(changes["category_id"]):
            raise ValidationError("The selected category does not exist.")

        if "name" in changes and self.repo.name_taken(changes["name"], exclude_id=product_id):
            raise ValidationError("The product name has already been taken.")

        try:
            updated = self.repo.update_product(product, changes)
        except Exception as e:
            logger.error(f"Updating product {product_id} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Updated product {product_id}: {sorted(changes)}")

        data = ProductDetailOut.model_validate(updated).to_json()
        self.cache.put(TAG, item_key("product", product_id), data)
        self.notifier.updated("product", {"product": data})
        return data

    def delete_product(self, product_id: int) -> None:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        if self.repo.has_order_lines(product_id):
            raise ConflictError("The product is part of an order and cannot be deleted.")

        try:
            self.repo.delete_product(product)
        except Exception as e:
            logger.error(f"Deleting product {product_id} failed: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Deleted product {product_id}")
        self.cache.forget(TAG, item_key("product", product_id))

    def _load_page(self, query: ListQuery) -> Dict[str, Any]:
        page = self.repo.list_products(query.per_page, query.sort_by, query.direction, query.page)
        return {
            "products": [ProductOut.model_validate(p).to_json() for p in page.items],
            "lastPage": page.last_page,
            "totalItems": page.total,
            "filter": query.to_json(),
        }

    def _load_one(self, product_id: int) -> Dict[str, Any] | None:
        product = self.repo.get_product(product_id)
        if not product:
            return None
        return ProductDetailOut.model_validate(product).to_json()
