#agrimart/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrimart.api.deps import get_current_user, get_notifier, get_quote_store
from agrimart.api.errors import http_error
from agrimart.data.database import get_db
from agrimart.domain.entities import CartLineView, CurrentUser
from agrimart.domain.errors import MarketError
from agrimart.domain.schemas import (
    CartDeltaIn,
    CartDeltaOut,
    CartItemIn,
    CartLineOut,
    CartLineQuantityIn,
    CartOut,
    CartProductOut,
    CartQuantityIn,
    CartRemoveIn,
    CheckoutIn,
    CheckoutOut,
    MessageOut,
)
from agrimart.services.cart_service import CartService
from agrimart.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


def _line_out(view: CartLineView) -> CartLineOut:
    line, product = view.line, view.product
    return CartLineOut(
        id=line.id,
        user_id=line.user_id,
        product_id=line.product_id,
        quantity=line.quantity,
        created_at=line.created_at,
        updated_at=line.updated_at,
        product=CartProductOut(
            id=product.id,
            name=product.name,
            price=product.price,
            unit=product.unit,
            image=product.image_path,
            stock=product.stock,
            min_order=product.min_order,
            status=product.status,
            weight=product.weight,
            origin_village_code=product.origin_village_code,
        ),
    )


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    summary = get_service(db).list_cart(user.id)
    return CartOut(
        lines=[_line_out(v) for v in summary.lines],
        total_weight=summary.total_weight,
        total_price=summary.total_price,
    )


@router.post("", response_model=MessageOut)
def add_item(
    payload: CartItemIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.add_or_increment(user.id, payload.product_id, payload.quantity)
    except MarketError as e:
        raise http_error(e)
    return MessageOut(message="Product added to cart successfully")


@router.put("", response_model=MessageOut)
def set_quantity(
    payload: CartQuantityIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        quantity = svc.set_quantity(user.id, payload.product_id, payload.quantity)
    except MarketError as e:
        raise http_error(e)
    if quantity == 0:
        return MessageOut(message="Product removed from cart successfully")
    return MessageOut(message="Cart item quantity updated successfully")


@router.patch("", response_model=CartDeltaOut)
def apply_delta(
    payload: CartDeltaIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        new_quantity = svc.apply_delta(user.id, payload.product_id, payload.delta)
    except MarketError as e:
        raise http_error(e)
    if new_quantity == 0:
        return CartDeltaOut(message="Product removed from cart (quantity <= 0)", new_quantity=0)
    return CartDeltaOut(message="Cart item quantity updated successfully", new_quantity=new_quantity)


@router.delete("", response_model=MessageOut)
def remove_item(
    payload: CartRemoveIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove(user.id, payload.product_id)
    except MarketError as e:
        raise http_error(e)
    return MessageOut(message="Product removed from cart successfully")


@router.put("/items/{line_id}", response_model=MessageOut)
def set_line_quantity(
    line_id: int,
    payload: CartLineQuantityIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        quantity = svc.set_line_quantity(user.id, line_id, payload.quantity)
    except MarketError as e:
        raise http_error(e)
    if quantity == 0:
        return MessageOut(message="Cart item removed successfully")
    return MessageOut(message="Cart item quantity updated successfully")


@router.delete("/items/{line_id}", response_model=MessageOut)
def remove_line(
    line_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_line(user.id, line_id)
    except MarketError as e:
        raise http_error(e)
    return MessageOut(message="Cart item removed successfully")


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifier=Depends(get_notifier),
    quote_store=Depends(get_quote_store),
):
    """
    Converts the whole cart into a pending order, atomically.
    """
    svc = CheckoutService(db, notifier=notifier, quote_store=quote_store)
    try:
        order_id = svc.checkout(
            user_id=user.id,
            address_id=payload.address_id,
            shipping_cost=payload.shipping_option,
            payment_method=payload.payment_method,
            total_amount=payload.total_amount,
        )
    except MarketError as e:
        raise http_error(e)
    return CheckoutOut(order_id=order_id)
