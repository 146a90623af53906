# agrimart/services/shipping_service.py
from typing import List

from agrimart.services.quote_store import QuoteStore
from agrimart.services.shipping_client import ShippingClient, ShippingQuote
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


class ShippingService:
    def __init__(self, client: ShippingClient, quote_store: QuoteStore | None = None):
        self.client = client
        self.quote_store = quote_store

    def estimate(
        self,
        user_id: int,
        origin_village_code: str,
        destination_village_code: str,
        weight: int,
        courier: str | None = None,
    ) -> List[ShippingQuote]:
        quotes = self.client.estimate(
            origin_village_code=origin_village_code,
            destination_village_code=destination_village_code,
            weight=weight,
            courier=courier,
        )
        logger.info(f"{len(quotes)} shipping quotes for user {user_id}")

        if self.quote_store is not None and quotes:
            self.quote_store.remember(
                user_id, destination_village_code, weight, [q.price for q in quotes]
            )

        return quotes
