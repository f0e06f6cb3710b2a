# restaurant/services/notification_service.py
import json
from typing import Any, Callable

import redis

from restaurant.celery_worker import celery_app
from restaurant.utils.settings import BROADCAST_REDIS_URL
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)


def channel_name(action: str, entity: str) -> str:
    """``channel_name("creating", "order")`` -> ``"creating-order"``."""
    return f"{action}-{entity}"


class NotificationService:
    """
    Broadcasts the result of a mutation (or a listing) to a named channel.
    Fire-and-forget: the event is handed to Celery and never awaited,
    and a failure to hand it over is logged, not raised.
    """

    def __init__(self, dispatcher: Callable[[str, Any], Any] | None = None):
        self.dispatcher = dispatcher or broadcast_event_task.delay

    def broadcast(self, channel: str, payload: Any) -> None:
        try:
            self.dispatcher(channel, payload)
        except Exception as e:
            logger.warning(f"Broadcast to {channel} failed: {e}")

    def created(self, entity: str, payload: Any) -> None:
        self.broadcast(channel_name("creating", entity), payload)

    def updated(self, entity: str, payload: Any) -> None:
        self.broadcast(channel_name("updating", entity), payload)

    def listed(self, entities: str, payload: Any) -> None:
        self.broadcast(channel_name("listing", entities), payload)


_publisher: redis.Redis | None = None


def _get_publisher() -> redis.Redis:
    global _publisher
    if _publisher is None:
        _publisher = redis.Redis.from_url(BROADCAST_REDIS_URL, decode_responses=True)
    return _publisher


@celery_app.task(name="restaurant.services.notification_service.broadcast_event_task", ignore_result=True)
def broadcast_event_task(channel: str, payload: Any):
    """
    Celery task - publishes the event on a redis pub/sub channel.
    Subscribers (websocket bridge, dashboards) are optional; zero receivers is fine.
    """
    receivers = _get_publisher().publish(channel, json.dumps(payload))
    logger.info(f"[BROADCAST] {channel} delivered to {receivers} subscriber(s)")
    return receivers
