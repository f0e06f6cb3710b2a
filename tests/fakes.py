"""In-memory test doubles.

``FakeRedis`` implements the slice of the redis-py client the cache and
the broadcast task use. ``RecordingDispatcher`` stands in for the Celery
``delay`` call. No network, no side effects.
"""

from __future__ import annotations

import json

import redis


class FakeRedis:

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.sets: dict[str, set[str]] = {}
        self.ttls: dict[str, int] = {}
        self.published: list[tuple[str, str]] = []
        self.reads = 0
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise redis.ConnectionError("redis is down")

    def get(self, key: str) -> str | None:
        self._check()
        self.reads += 1
        return self.values.get(key)

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self._check()
        self.values[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def sadd(self, key: str, *members: str) -> int:
        self._check()
        bucket = self.sets.setdefault(key, set())
        before = len(bucket)
        bucket.update(members)
        return len(bucket) - before

    def srem(self, key: str, *members: str) -> int:
        self._check()
        bucket = self.sets.get(key, set())
        removed = len(bucket & set(members))
        bucket.difference_update(members)
        return removed

    def smembers(self, key: str) -> set[str]:
        self._check()
        return set(self.sets.get(key, set()))

    def expire(self, key: str, seconds: int) -> bool:
        self._check()
        self.ttls[key] = seconds
        return True

    def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                removed += 1
            if self.sets.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def ping(self) -> bool:
        self._check()
        return True

    def publish(self, channel: str, message: str) -> int:
        self._check()
        self.published.append((channel, message))
        return 0

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)

    def expire_all(self) -> None:
        """Simulate every ttl running out."""
        for key in list(self.ttls):
            self.delete(key)


class FakePipeline:

    def __init__(self, client: FakeRedis) -> None:
        self._client = client
        self._calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        def queue(*args, **kwargs):
            self._calls.append((name, args, kwargs))
            return self
        return queue

    def execute(self) -> list:
        calls, self._calls = self._calls, []
        return [getattr(self._client, name)(*args, **kwargs) for name, args, kwargs in calls]


class RecordingDispatcher:

    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, object]] = []
        self.fail = fail

    def __call__(self, channel: str, payload) -> None:
        if self.fail:
            raise ConnectionError("broker unreachable")
        # what goes over the wire is json, keep the test honest about it
        self.events.append((channel, json.loads(json.dumps(payload))))

    def channels(self) -> list[str]:
        return [channel for channel, _ in self.events]

    def last(self, channel: str):
        for name, payload in reversed(self.events):
            if name == channel:
                return payload
        return None
