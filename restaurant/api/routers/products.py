# restaurant/api/routers/products.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from restaurant.api.dependencies import get_cache, get_notifier, list_query
from restaurant.api.responses import envelope, no_content
from restaurant.data.database import get_db
from restaurant.domain.schemas import ListQuery, ProductCreate, ProductUpdate
from restaurant.services.cache_service import CacheService
from restaurant.services.notification_service import NotificationService
from restaurant.services.product_service import ProductService
from restaurant.utils.retry import api_retry

router = APIRouter(prefix="/products", tags=["products"])


def get_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    notifier: NotificationService = Depends(get_notifier),
) -> ProductService:
    return ProductService(db=db, cache=cache, notifier=notifier)


@router.get("")
@api_retry()
def list_products(
    query: ListQuery = Depends(list_query),
    svc: ProductService = Depends(get_service),
):
    return envelope(svc.list_products(query))


@router.post("", status_code=201)
@api_retry()
def create_product(payload: ProductCreate, svc: ProductService = Depends(get_service)):
    return envelope({"product": svc.create_product(payload)}, status_code=201)


@router.get("/{product_id}")
@api_retry()
def get_product(product_id: int, svc: ProductService = Depends(get_service)):
    return envelope({"product": svc.get_product(product_id)})


@router.put("/{product_id}")
@api_retry()
def update_product(
    product_id: int,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_service),
):
    return envelope({"product": svc.update_product(product_id, payload)})


@router.delete("/{product_id}", status_code=204)
@api_retry()
def delete_product(product_id: int, svc: ProductService = Depends(get_service)):
    svc.delete_product(product_id)
    return no_content()
