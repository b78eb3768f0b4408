# backend/delivery_dates/services/delivery/override_cache.py
"""
Redis read-through cache for product overrides.

Key format: delivery:override:{shop}:{product_id}
Value: JSON object of the override fields, or "__none__" when the product
has no stored override (so misses are cached too).

Redis errors never fail a request: the cache is bypassed and the wrapped
store answers.
"""

import json
import logging
from dataclasses import asdict

from redis import Redis
from redis.exceptions import RedisError

from .overrides import ProductOverride
from .stores import OverrideStore

logger = logging.getLogger(__name__)

EMPTY_SENTINEL = "__none__"


class CachedOverrideStore:
    KEY_PREFIX = "delivery:override"

    def __init__(self, inner: OverrideStore, redis: Redis, ttl_seconds: int = 600):
        self.inner = inner
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    def _key(self, shop: str, product_id: str) -> str:
        return f"{self.KEY_PREFIX}:{shop}:{product_id}"

    def get(self, shop: str, product_id: str) -> ProductOverride | None:
        key = self._key(shop, product_id)
        try:
            cached = self.redis.get(key)
        except RedisError as e:
            logger.warning(f"Override cache read failed for {key}: {e}")
            return self.inner.get(shop, product_id)

        if cached is not None:
            if isinstance(cached, bytes):
                cached = cached.decode()
            if cached == EMPTY_SENTINEL:
                return None
            return ProductOverride(**json.loads(cached))

        override = self.inner.get(shop, product_id)
        value = EMPTY_SENTINEL if override is None else json.dumps(asdict(override))
        try:
            self.redis.set(key, value, ex=self.ttl_seconds)
        except RedisError as e:
            logger.warning(f"Override cache write failed for {key}: {e}")
        return override

    def upsert(self, shop: str, product_id: str, override: ProductOverride) -> ProductOverride:
        stored = self.inner.upsert(shop, product_id, override)
        self.invalidate(shop, product_id)
        return stored

    def invalidate(self, shop: str, product_id: str) -> None:
        key = self._key(shop, product_id)
        try:
            self.redis.delete(key)
        except RedisError as e:
            logger.warning(f"Override cache invalidation failed for {key}: {e}")
