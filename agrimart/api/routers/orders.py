# agrimart/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrimart.api.deps import get_current_user
from agrimart.api.errors import http_error
from agrimart.data.database import get_db
from agrimart.domain.entities import CurrentUser, Order
from agrimart.domain.errors import MarketError
from agrimart.domain.schemas import (
    AddressOut,
    OrderLineOut,
    OrderListOut,
    OrderOut,
    OrderResultOut,
    OrderStatusIn,
)
from agrimart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


def order_out(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        user_id=order.user_id,
        address_id=order.address_id,
        status=order.status,
        payment_method=order.payment_method,
        total_product_price=order.total_product_price,
        shipping_cost=order.shipping_cost,
        grand_total=order.grand_total,
        created_at=order.created_at,
        updated_at=order.updated_at,
        address=AddressOut.model_validate(order.address) if order.address else None,
        order_items=[OrderLineOut.model_validate(line) for line in order.lines],
    )


@router.get("", response_model=OrderListOut)
def list_orders(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Orders of the calling user, newest first, with address and lines.
    """
    orders = get_service(db).list_orders(user.id)
    return OrderListOut(orders=[order_out(o) for o in orders])


@router.get("/{order_id}", response_model=OrderResultOut)
def get_order(
    order_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        order = svc.get_order(order_id, user)
    except MarketError as e:
        raise http_error(e)
    return OrderResultOut(order=order_out(order))


@router.patch("/{order_id}/status", response_model=OrderResultOut)
def change_status(
    order_id: int,
    payload: OrderStatusIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        order = svc.change_status(order_id, payload.status, user)
    except MarketError as e:
        raise http_error(e)
    return OrderResultOut(order=order_out(order))


@router.delete("/{order_id}", response_model=OrderResultOut)
def cancel_order(
    order_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Cancels a pending order. The order is kept with status cancelled.
    """
    svc = get_service(db)
    try:
        order = svc.cancel_order(order_id, user)
    except MarketError as e:
        raise http_error(e)
    return OrderResultOut(order=order_out(order))
