# agrimart/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from agrimart.domain.enums import OrderStatus, ProductStatus


class CamelModel(BaseModel):
    """Wire format is camelCase, snake_case names are accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    success: bool = True
    message: str


# cart

class CartItemIn(CamelModel):
    """Add-to-cart request."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class CartQuantityIn(CamelModel):
    """Absolute quantity, 0 removes the line."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=0)


class CartLineQuantityIn(CamelModel):
    quantity: int = Field(..., ge=0)


class CartDeltaIn(CamelModel):
    product_id: int = Field(..., gt=0)
    delta: int = Field(..., strict=True)


class CartRemoveIn(CamelModel):
    product_id: int = Field(..., gt=0)


class CartDeltaOut(MessageOut):
    new_quantity: int


class CartProductOut(CamelModel):
    id: int
    name: str
    price: Decimal
    unit: str
    image: Optional[str] = None
    stock: int
    min_order: int
    status: ProductStatus
    weight: int
    origin_village_code: Optional[str] = None


class CartLineOut(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: CartProductOut


class CartOut(CamelModel):
    success: bool = True
    lines: List[CartLineOut]
    total_weight: int
    total_price: Decimal


# checkout

class CheckoutIn(CamelModel):
    address_id: int = Field(..., gt=0)
    #chosen courier price from /shipping/estimate
    shipping_option: Decimal = Field(..., ge=0)
    payment_method: str = Field(..., min_length=1, max_length=32)
    total_amount: Decimal = Field(..., gt=0)


class CheckoutOut(CamelModel):
    success: bool = True
    order_id: int


# addresses

class AddressIn(CamelModel):
    detail: str = Field(..., min_length=1)
    city_id: Optional[str] = None
    district_id: Optional[str] = None
    village_code: Optional[str] = None
    province: Optional[str] = None
    zip_code: Optional[str] = Field(None, max_length=10)


class AddressPatchIn(CamelModel):
    """Only fields present in the request body are applied."""

    detail: Optional[str] = Field(None, min_length=1)
    city_id: Optional[str] = None
    district_id: Optional[str] = None
    village_code: Optional[str] = None
    province: Optional[str] = None
    zip_code: Optional[str] = Field(None, max_length=10)


class AddressOut(CamelModel):
    id: int
    detail: str
    city_id: Optional[str] = None
    district_id: Optional[str] = None
    village_code: Optional[str] = None
    province: Optional[str] = None
    zip_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AddressListOut(CamelModel):
    success: bool = True
    addresses: List[AddressOut]


class AddressResultOut(CamelModel):
    success: bool = True
    address: AddressOut
    message: Optional[str] = None


# products

class ProductIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=32)
    stock: int = Field(0, ge=0)
    min_order: int = Field(1, ge=1)
    weight: int = Field(0, ge=0)
    seller_id: int = Field(..., gt=0)
    harvest_date: Optional[date] = None
    image_path: Optional[str] = None
    category: Optional[str] = None
    origin_village_code: Optional[str] = None
    status: ProductStatus = ProductStatus.PRE_ORDER


class ProductPatchIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=32)
    stock: Optional[int] = Field(None, ge=0)
    min_order: Optional[int] = Field(None, ge=1)
    weight: Optional[int] = Field(None, ge=0)
    harvest_date: Optional[date] = None
    image_path: Optional[str] = None
    category: Optional[str] = None
    origin_village_code: Optional[str] = None
    status: Optional[ProductStatus] = None


class ProductOut(CamelModel):
    id: int
    seller_id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    unit: str
    stock: int
    min_order: int
    weight: int
    status: ProductStatus
    harvest_date: Optional[date] = None
    image_path: Optional[str] = None
    category: Optional[str] = None
    origin_village_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductListOut(CamelModel):
    success: bool = True
    products: List[ProductOut]


class ProductResultOut(CamelModel):
    success: bool = True
    product: ProductOut


# orders

class OrderLineOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    price_at_order: Decimal
    quantity: int


class OrderOut(CamelModel):
    id: int
    user_id: int
    address_id: int
    status: OrderStatus
    payment_method: str
    total_product_price: Decimal
    shipping_cost: Decimal
    grand_total: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    address: Optional[AddressOut] = None
    order_items: List[OrderLineOut] = Field(default_factory=list)


class OrderListOut(CamelModel):
    success: bool = True
    orders: List[OrderOut]


class OrderResultOut(CamelModel):
    success: bool = True
    order: OrderOut


class OrderStatusIn(CamelModel):
    status: OrderStatus


# shipping

class ShippingEstimateIn(CamelModel):
    origin_village_code: str = Field(..., min_length=1)
    destination_village_code: str = Field(..., min_length=1)
    #grams
    weight: int = Field(..., gt=0)
    courier: Optional[str] = None


class ShippingQuoteOut(CamelModel):
    service: str
    description: str
    price: Decimal
    etd: str


class ShippingEstimateOut(CamelModel):
    success: bool = True
    quotes: List[ShippingQuoteOut]
