# agrimart/services/shipping_client.py
from dataclasses import dataclass
from decimal import Decimal
from typing import List

import requests

from agrimart.domain.errors import ShippingServiceError
from agrimart.utils.retry import http_retry
from agrimart.utils.settings import SHIPPING_API_URL, SHIPPING_API_KEY, SHIPPING_API_TIMEOUT
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ShippingQuote:
    service: str
    description: str
    price: Decimal
    etd: str


class ShippingClient:
    """
    Courier rate lookup (api.co.id expedition endpoint).

    Origin and destination are village codes, weight is in grams.
    Transport errors are retried, a non-2xx answer or a broken envelope is not.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: int = SHIPPING_API_TIMEOUT,
    ):
        self.base_url = (base_url or SHIPPING_API_URL).rstrip("/")
        self.api_key = SHIPPING_API_KEY if api_key is None else api_key
        self.timeout = timeout

    @http_retry()
    def _get(self, params: dict) -> requests.Response:
        logger.info(f"ShippingClient GET {self.base_url} {params}")
        return requests.get(
            self.base_url,
            params=params,
            headers={"x-api-co-id": self.api_key},
            timeout=self.timeout,
        )

    def estimate(
        self,
        origin_village_code: str,
        destination_village_code: str,
        weight: int,
        courier: str | None = None,
    ) -> List[ShippingQuote]:
        params = {
            "origin_village_code": origin_village_code,
            "destination_village_code": destination_village_code,
            "weight": str(weight),
        }
        if courier:
            params["courier"] = courier

        try:
            resp = self._get(params)
        except requests.RequestException as e:
            logger.error(f"Shipping API unreachable: {e}")
            raise ShippingServiceError("Shipping service unavailable") from e

        if not resp.ok:
            logger.error(f"Shipping API HTTP error {resp.status_code}: {resp.text}")
            raise ShippingServiceError(f"Shipping service error: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ShippingServiceError("Invalid response from shipping service") from e

        couriers = (data.get("data") or {}).get("couriers") if isinstance(data, dict) else None
        if not isinstance(couriers, list) or not data.get("is_success"):
            logger.error(f"Shipping API response structure invalid: {data}")
            raise ShippingServiceError("Invalid response structure from shipping service")

        return [self._to_quote(item) for item in couriers]

    @staticmethod
    def _to_quote(item: dict) -> ShippingQuote:
        code = item.get("courier_code") or ""
        estimation = item.get("estimation") or ""
        return ShippingQuote(
            service=item.get("courier_name") or code or "Unknown Service",
            description=f"({code}) {estimation or 'no estimate'}",
            price=Decimal(str(item.get("price") or 0)),
            etd=estimation or "N/A",
        )
