# restaurant/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from restaurant.api import register_api
from restaurant.data.database import init_db
from restaurant.services.cache_service import CacheService
from restaurant.services.notification_service import NotificationService
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


def create_app(
    cache: CacheService | None = None,
    notifier: NotificationService | None = None,
    manage_database: bool = True,
) -> FastAPI:
    app = FastAPI(
        title="Restaurant Ordering API",
        version="1.0.0",
        lifespan=lifespan if manage_database else None,
    )

    # shared per app instance, handed to services through dependencies
    app.state.cache = cache or CacheService()
    app.state.notifier = notifier or NotificationService()

    register_api(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
