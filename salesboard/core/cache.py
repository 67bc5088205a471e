# salesboard/core/cache.py

import json
import logging

import redis

logger = logging.getLogger(__name__)

PREFIX = "salesboard"


def cache_key_builder(prefix: str, **kwargs):
    key = prefix + ":" + ":".join([f"{k}={v}" for k, v in kwargs.items() if v is not None])
    return f"{PREFIX}:{key}"


class SummaryCache:
    """JSON values in redis with a TTL, dropped wholesale after each upload."""

    def __init__(self, client: redis.Redis, ttl: int = 300):
        self.r = client
        self.ttl = ttl

    @classmethod
    def from_url(cls, url: str, ttl: int = 300):
        return cls(redis.Redis.from_url(url, decode_responses=True), ttl)

    def get(self, key):
        try:
            cached = self.r.get(key)
        except redis.RedisError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None
        if cached:
            return json.loads(cached)
        return None

    def set(self, key, data):
        try:
            self.r.setex(key, self.ttl, json.dumps(data))
        except redis.RedisError as e:
            logger.warning("Cache write failed for %s: %s", key, e)

    def invalidate(self):
        try:
            keys = list(self.r.scan_iter(match=f"{PREFIX}:*"))
            if keys:
                self.r.delete(*keys)
        except redis.RedisError as e:
            logger.warning("Cache invalidation failed: %s", e)

    def close(self):
        self.r.close()
