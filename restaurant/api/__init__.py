# restaurant/api/__init__.py
from fastapi import FastAPI

from restaurant.api.errors import register_error_handlers
from restaurant.api.routers import categories, health, orders, products


def register_api(app: FastAPI) -> None:
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(categories.router)
    app.include_router(categories.menu_router)
    app.include_router(products.router)
    app.include_router(orders.router)
