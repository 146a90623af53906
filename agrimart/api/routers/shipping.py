# agrimart/api/routers/shipping.py
from fastapi import APIRouter, Depends

from agrimart.api.deps import get_current_user, get_quote_store, get_shipping_client
from agrimart.api.errors import http_error
from agrimart.domain.entities import CurrentUser
from agrimart.domain.errors import MarketError
from agrimart.domain.schemas import ShippingEstimateIn, ShippingEstimateOut, ShippingQuoteOut
from agrimart.services.shipping_service import ShippingService

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("/estimate", response_model=ShippingEstimateOut)
def estimate(
    payload: ShippingEstimateIn,
    user: CurrentUser = Depends(get_current_user),
    client=Depends(get_shipping_client),
    quote_store=Depends(get_quote_store),
):
    """
    Courier prices for a parcel; the returned prices are the only
    shipping costs checkout will accept for this user.
    """
    svc = ShippingService(client, quote_store=quote_store)
    try:
        quotes = svc.estimate(
            user_id=user.id,
            origin_village_code=payload.origin_village_code,
            destination_village_code=payload.destination_village_code,
            weight=payload.weight,
            courier=payload.courier,
        )
    except MarketError as e:
        raise http_error(e)
    return ShippingEstimateOut(quotes=[ShippingQuoteOut.model_validate(q) for q in quotes])
