# restaurant/api/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from restaurant.api.dependencies import get_cache
from restaurant.data.database import get_db
from restaurant.services.cache_service import CacheService
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db), cache: CacheService = Depends(get_cache)):
    status = {"database": "healthy", "redis": "healthy"}

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check: database unavailable: {e}")
        status["database"] = "unhealthy"

    try:
        cache.ping()
    except Exception as e:
        logger.warning(f"Health check: redis unavailable: {e}")
        status["redis"] = "unhealthy"

    healthy = all(value == "healthy" for value in status.values())
    return JSONResponse(status_code=200 if healthy else 503, content=status)
