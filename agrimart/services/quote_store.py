# agrimart/services/quote_store.py
from decimal import Decimal
from typing import Iterable

import redis

from agrimart.utils.retry import redis_retry
from agrimart.utils.settings import REDIS_URL, SHIPPING_QUOTE_TTL_SECONDS
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


def _normalize(price) -> str:
    return str(Decimal(str(price)).quantize(Decimal("0.01")))


class QuoteStore:
    """
    Remembers shipping prices quoted to a user so checkout only accepts a
    shipping cost the courier API actually returned for the same shipment.

    one redis SET per (user, destination village, weight in grams), each set
    expires after ttl
    """

    def __init__(self, url: str | None = None, ttl: int = SHIPPING_QUOTE_TTL_SECONDS):
        self.redis = redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @staticmethod
    def _key(user_id: int, destination_village_code: str, weight: int) -> str:
        return f"shipping:quotes:{user_id}:{destination_village_code}:{int(weight)}"

    @redis_retry()
    def remember(self, user_id: int, destination_village_code: str, weight: int, prices: Iterable) -> None:
        values = [_normalize(p) for p in prices]
        if not values:
            return
        key = self._key(user_id, destination_village_code, weight)
        logger.info(f"Remember {len(values)} shipping quotes under {key}")
        pipe = self.redis.pipeline()
        pipe.sadd(key, *values)
        pipe.expire(key, self.ttl)
        pipe.execute()

    @redis_retry()
    def is_quoted(self, user_id: int, destination_village_code: str | None, weight: int, price) -> bool:
        if not destination_village_code:
            return False
        key = self._key(user_id, destination_village_code, weight)
        return bool(self.redis.sismember(key, _normalize(price)))
