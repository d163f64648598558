import json
import logging
import time
from dataclasses import dataclass
from typing import Optional

import redis

logger = logging.getLogger(__name__)


@dataclass
class CacheResult:
    value: Optional[str]
    hit: bool
    age_seconds: Optional[int]


class RedisCache:
    """
    Stores raw response bodies + metadata:
      key -> {"stored_at": <unix>, "body": "<response text>"}
    """

    def __init__(self, redis_url: str):
        self.client = redis.from_url(redis_url, decode_responses=True)

    def get_body(self, key: str) -> CacheResult:
        try:
            raw = self.client.get(key)
        except redis.RedisError as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return CacheResult(value=None, hit=False, age_seconds=None)
        if not raw:
            return CacheResult(value=None, hit=False, age_seconds=None)

        try:
            obj = json.loads(raw)
            stored_at = int(obj.get("stored_at", 0))
            body = obj["body"]
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.warning("Ignoring corrupt cache entry %s", key)
            return CacheResult(value=None, hit=False, age_seconds=None)
        if not isinstance(body, str):
            return CacheResult(value=None, hit=False, age_seconds=None)

        age = max(0, int(time.time()) - stored_at)
        return CacheResult(value=body, hit=True, age_seconds=age)

    def set_body(self, key: str, body: str, ttl_seconds: int) -> None:
        obj = {"stored_at": int(time.time()), "body": body}
        try:
            self.client.setex(key, ttl_seconds, json.dumps(obj))
        except redis.RedisError as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    def acquire_lock(self, lock_key: str, ttl_ms: int = 10_000) -> bool:
        """True when the caller may refresh. With Redis unreachable the refresh proceeds unlocked."""
        try:
            return bool(self.client.set(lock_key, "1", nx=True, px=ttl_ms))
        except redis.RedisError as exc:
            logger.warning("Lock unavailable for %s, refreshing without it: %s", lock_key, exc)
            return True

    def release_lock(self, lock_key: str) -> None:
        try:
            self.client.delete(lock_key)
        except redis.RedisError as exc:
            logger.warning("Failed to release lock %s: %s", lock_key, exc)


def cache_key(kind: str, units: str, city: str) -> str:
    return f"{kind}:{units}:{city.strip().lower()}"
