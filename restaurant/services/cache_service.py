# restaurant/services/cache_service.py
import json
from typing import Any, Callable

import redis

from restaurant.utils.settings import CACHE_TTL_SECONDS, REDIS_URL
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)

#tags are plain redis sets holding every key written under them,
#flush = SMEMBERS + DEL of all of them + DEL of the set itself
_TAG_PREFIX = "tag:"


def list_key(entity: str, per_page: int, sort_by: str, direction: str, page: int) -> str:
    return f"{entity}:list:{per_page}:{sort_by}:{direction}:page:{page}"


def item_key(entity: str, item_id: int) -> str:
    return f"{entity}:{item_id}"


class CacheService:
    """
    -read-through (remember) for listings and single items
    -write-through of one key (put) on updates
    -coarse invalidation of a whole tag (flush) on creates
    Never the source of truth, every entry expires after ttl seconds.
    """

    def __init__(self, client: redis.Redis | None = None, ttl: int = CACHE_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.ttl = ttl

    def remember(self, tag: str, key: str, loader: Callable[[], Any]) -> Any:
        cached = self.redis.get(key)
        if cached is not None:
            return json.loads(cached)

        logger.info(f"Cache miss {key}")
        value = loader()
        if value is None:
            return None

        self._store(tag, key, value)
        return value

    #put, forget and flush follow a committed write: a redis error is logged
    #and the stale entry is left to expire, the write itself stands
    def put(self, tag: str, key: str, value: Any) -> None:
        try:
            self._store(tag, key, value)
        except redis.RedisError as e:
            logger.warning(f"Cache put {key} failed, entry expires in {self.ttl}s: {e}")

    def forget(self, tag: str, key: str) -> None:
        try:
            pipe = self.redis.pipeline()
            pipe.delete(key)
            pipe.srem(_TAG_PREFIX + tag, key)
            pipe.execute()
        except redis.RedisError as e:
            logger.warning(f"Cache forget {key} failed, entry expires in {self.ttl}s: {e}")

    def flush(self, tag: str) -> None:
        tag_key = _TAG_PREFIX + tag
        try:
            keys = self.redis.smembers(tag_key)
            logger.info(f"Flushing cache tag {tag} ({len(keys)} keys)")
            if keys:
                self.redis.delete(*keys)
            self.redis.delete(tag_key)
        except redis.RedisError as e:
            logger.warning(f"Cache flush of tag {tag} failed, entries expire in {self.ttl}s: {e}")

    def ping(self) -> bool:
        return bool(self.redis.ping())

    def _store(self, tag: str, key: str, value: Any) -> None:
        tag_key = _TAG_PREFIX + tag
        pipe = self.redis.pipeline()
        pipe.set(key, json.dumps(value), ex=self.ttl)
        pipe.sadd(tag_key, key)
        # the tag set outlives its members by at most one ttl
        pipe.expire(tag_key, self.ttl)
        pipe.execute()
