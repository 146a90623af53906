# agrimart/api/routers/products.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agrimart.api.deps import get_current_user
from agrimart.api.errors import http_error
from agrimart.data.database import get_db
from agrimart.domain.entities import CurrentUser, ProductPatch
from agrimart.domain.errors import MarketError
from agrimart.domain.schemas import (
    MessageOut,
    ProductIn,
    ProductListOut,
    ProductOut,
    ProductPatchIn,
    ProductResultOut,
)
from agrimart.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=ProductListOut)
def list_products(
    category: str | None = Query(None),
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        products = svc.list_products(category=category, limit=limit, offset=offset)
    except MarketError as e:
        raise http_error(e)
    return ProductListOut(products=[ProductOut.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductResultOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        product = svc.get_product(product_id)
    except MarketError as e:
        raise http_error(e)
    return ProductResultOut(product=ProductOut.model_validate(product))


@router.post("", response_model=ProductResultOut, status_code=201)
def create_product(
    payload: ProductIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        product = svc.create_product(user, payload.model_dump())
    except MarketError as e:
        raise http_error(e)
    return ProductResultOut(product=ProductOut.model_validate(product))


@router.patch("/{product_id}", response_model=ProductResultOut)
def update_product(
    product_id: int,
    payload: ProductPatchIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    patch = ProductPatch(**{name: getattr(payload, name) for name in payload.model_fields_set})
    svc = get_service(db)
    try:
        product = svc.update_product(user, product_id, patch)
    except MarketError as e:
        raise http_error(e)
    return ProductResultOut(product=ProductOut.model_validate(product))


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_product(user, product_id)
    except MarketError as e:
        raise http_error(e)
    return MessageOut(message="Product deleted successfully")
