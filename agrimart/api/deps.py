# agrimart/api/deps.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agrimart.api.security import InvalidToken, decode_access_token
from agrimart.domain.entities import CurrentUser
from agrimart.services.notification_service import NotificationService
from agrimart.services.quote_store import QuoteStore
from agrimart.services.shipping_client import ShippingClient
from agrimart.utils.settings import SHIPPING_QUOTE_TTL_SECONDS

bearer = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> CurrentUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return decode_access_token(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_notifier() -> NotificationService | None:
    return NotificationService()


def get_quote_store() -> QuoteStore | None:
    if SHIPPING_QUOTE_TTL_SECONDS <= 0:
        return None
    return QuoteStore()


def get_shipping_client() -> ShippingClient:
    return ShippingClient()
