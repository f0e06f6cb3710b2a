"""Category service against an in-memory SQLite session."""

from decimal import Decimal

import pytest

from restaurant.data.models import ProductModel
from restaurant.domain.exceptions import ConflictError, NotFoundError, ValidationError
from restaurant.domain.schemas import CategoryCreate, CategoryUpdate, ListQuery
from restaurant.services.category_service import CategoryService


@pytest.fixture
def service(db, cache, notifier):
    return CategoryService(db=db, cache=cache, notifier=notifier)


class TestCreateCategory:

    def test_happy_path(self, service, dispatcher):
        data = service.create_category(CategoryCreate(name="Pizza"))

        assert data["id"] == 1
        assert data["name"] == "Pizza"
        assert data["products"] == []
        assert dispatcher.channels() == ["creating-category"]
        assert dispatcher.last("creating-category") == {"category": data}

    def test_duplicate_name_rejected(self, service):
        service.create_category(CategoryCreate(name="Pizza"))
        with pytest.raises(ValidationError, match="already been taken"):
            service.create_category(CategoryCreate(name="Pizza"))

    def test_uniqueness_is_case_sensitive(self, service):
        service.create_category(CategoryCreate(name="Pizza"))
        data = service.create_category(CategoryCreate(name="pizza"))
        assert data["name"] == "pizza"

    def test_create_flushes_listing_cache(self, service):
        query = ListQuery()
        assert service.list_categories(query)["totalItems"] == 0

        service.create_category(CategoryCreate(name="Pizza"))

        assert service.list_categories(query)["totalItems"] == 1


class TestListCategories:

    def test_pagination_and_filter_echo(self, service):
        for name in ("Drinks", "Pizza", "Desserts"):
            service.create_category(CategoryCreate(name=name))

        data = service.list_categories(ListQuery(per_page=2, sort_by="name", direction="desc", page=1))

        assert [c["name"] for c in data["categories"]] == ["Pizza", "Drinks"]
        assert data["lastPage"] == 2
        assert data["totalItems"] == 3
        assert data["filter"] == {"perPage": 2, "sortBy": "name", "direction": "desc", "page": 1}

    def test_last_page_is_at_least_one(self, service):
        assert service.list_categories(ListQuery())["lastPage"] == 1

    def test_unknown_sort_field_rejected(self, service):
        with pytest.raises(ValidationError, match="sortBy"):
            service.list_categories(ListQuery(sort_by="name; drop table categories"))

    def test_listing_is_broadcast(self, service, dispatcher):
        service.create_category(CategoryCreate(name="Pizza"))
        service.list_categories(ListQuery())
        payload = dispatcher.last("listing-categories")
        assert [c["name"] for c in payload["categories"]] == ["Pizza"]


class TestGetAndUpdate:

    def test_get_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.get_category(42)

    def test_update_overwrites_cached_item(self, service, dispatcher):
        created = service.create_category(CategoryCreate(name="Pizza"))
        service.get_category(created["id"])

        service.update_category(created["id"], CategoryUpdate(name="Pizzas"))

        assert service.get_category(created["id"])["name"] == "Pizzas"
        assert dispatcher.last("updating-category")["category"]["name"] == "Pizzas"

    def test_update_leaves_listing_stale_until_ttl(self, service, fake_redis):
        created = service.create_category(CategoryCreate(name="Pizza"))
        service.list_categories(ListQuery())

        service.update_category(created["id"], CategoryUpdate(name="Pizzas"))
        assert service.list_categories(ListQuery())["categories"][0]["name"] == "Pizza"

        fake_redis.expire_all()
        assert service.list_categories(ListQuery())["categories"][0]["name"] == "Pizzas"

    def test_update_to_own_name_is_allowed(self, service):
        created = service.create_category(CategoryCreate(name="Pizza"))
        assert service.update_category(created["id"], CategoryUpdate(name="Pizza"))["name"] == "Pizza"

    def test_update_to_taken_name_rejected(self, service):
        service.create_category(CategoryCreate(name="Pizza"))
        drinks = service.create_category(CategoryCreate(name="Drinks"))
        with pytest.raises(ValidationError, match="already been taken"):
            service.update_category(drinks["id"], CategoryUpdate(name="Pizza"))

    def test_update_with_explicit_null_rejected(self, service):
        created = service.create_category(CategoryCreate(name="Pizza"))
        with pytest.raises(ValidationError, match="must be a string"):
            service.update_category(created["id"], CategoryUpdate(name=None))

    def test_empty_update_changes_nothing(self, service):
        created = service.create_category(CategoryCreate(name="Pizza"))
        assert service.update_category(created["id"], CategoryUpdate())["name"] == "Pizza"

    def test_update_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.update_category(42, CategoryUpdate(name="x"))


class TestDeleteCategory:

    def test_delete(self, service, fake_redis):
        created = service.create_category(CategoryCreate(name="Pizza"))
        service.get_category(created["id"])

        service.delete_category(created["id"])

        assert "category:1" not in fake_redis.values
        with pytest.raises(NotFoundError):
            service.get_category(created["id"])

    def test_delete_with_products_is_blocked(self, service, db):
        created = service.create_category(CategoryCreate(name="Pizza"))
        db.add(ProductModel(category_id=created["id"], name="Margherita", price=Decimal("10.00")))
        db.commit()

        with pytest.raises(ConflictError, match="cannot be deleted"):
            service.delete_category(created["id"])

        assert service.get_category(created["id"])["name"] == "Pizza"

    def test_delete_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.delete_category(42)

    def test_delete_leaves_listing_stale(self, service):
        created = service.create_category(CategoryCreate(name="Pizza"))
        service.list_categories(ListQuery())

        service.delete_category(created["id"])

        # only the item key is forgotten, the cached page still lists it
        assert service.list_categories(ListQuery())["totalItems"] == 1
