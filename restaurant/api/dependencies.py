# restaurant/api/dependencies.py
from fastapi import Query, Request

from restaurant.domain.schemas import ListQuery
from restaurant.services.cache_service import CacheService
from restaurant.services.notification_service import NotificationService
from restaurant.utils.settings import DEFAULT_PER_PAGE


def get_cache(request: Request) -> CacheService:
    return request.app.state.cache


def get_notifier(request: Request) -> NotificationService:
    return request.app.state.notifier


def list_query(
    per_page: int = Query(DEFAULT_PER_PAGE, alias="perPage", ge=1),
    sort_by: str = Query("id", alias="sortBy"),
    direction: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
) -> ListQuery:
    return ListQuery(per_page=per_page, sort_by=sort_by, direction=direction, page=page)
