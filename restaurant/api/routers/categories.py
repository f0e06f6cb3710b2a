# restaurant/api/routers/categories.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from restaurant.api.dependencies import get_cache, get_notifier, list_query
from restaurant.api.responses import envelope, no_content
from restaurant.data.database import get_db
from restaurant.domain.schemas import CategoryCreate, CategoryUpdate, ListQuery
from restaurant.services.cache_service import CacheService
from restaurant.services.category_service import CategoryService
from restaurant.services.notification_service import NotificationService
from restaurant.utils.retry import api_retry

router = APIRouter(prefix="/categories", tags=["categories"])
menu_router = APIRouter(tags=["categories"])


def get_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    notifier: NotificationService = Depends(get_notifier),
) -> CategoryService:
    return CategoryService(db=db, cache=cache, notifier=notifier)


@router.get("")
@api_retry()
def list_categories(
    query: ListQuery = Depends(list_query),
    svc: CategoryService = Depends(get_service),
):
    return envelope(svc.list_categories(query))


@menu_router.get("/menu")
@api_retry()
def menu(
    query: ListQuery = Depends(list_query),
    svc: CategoryService = Depends(get_service),
):
    """The menu: every category with the products it offers."""
    return envelope(svc.list_categories(query))


@router.post("", status_code=201)
@api_retry()
def create_category(payload: CategoryCreate, svc: CategoryService = Depends(get_service)):
    return envelope({"category": svc.create_category(payload)}, status_code=201)


@router.get("/{category_id}")
@api_retry()
def get_category(category_id: int, svc: CategoryService = Depends(get_service)):
    return envelope({"category": svc.get_category(category_id)})


@router.put("/{category_id}")
@api_retry()
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    svc: CategoryService = Depends(get_service),
):
    return envelope({"category": svc.update_category(category_id, payload)})


@router.delete("/{category_id}", status_code=204)
@api_retry()
def delete_category(category_id: int, svc: CategoryService = Depends(get_service)):
    svc.delete_category(category_id)
    return no_content()
