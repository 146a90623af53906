# agrimart/domain/entities.py
"""
Typed domain entities.

Repositories map ORM rows to these at their boundary, services never
touch raw rows.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from agrimart.domain.enums import OrderStatus, ProductStatus, UserRole


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class Product:
    id: int
    seller_id: int
    name: str
    price: Decimal
    unit: str
    stock: int
    min_order: int
    status: ProductStatus
    weight: int = 0
    description: Optional[str] = None
    harvest_date: Optional[date] = None
    image_path: Optional[str] = None
    category: Optional[str] = None
    origin_village_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CartLine:
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CartLineView:
    line: CartLine
    product: Product

    @property
    def weight(self) -> int:
        return self.line.quantity * (self.product.weight or 0)

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.line.quantity


@dataclass(frozen=True)
class CartSummary:
    lines: List[CartLineView]
    total_weight: int
    total_price: Decimal


@dataclass(frozen=True)
class Address:
    id: int
    user_id: int
    detail: str
    city_id: Optional[str] = None
    district_id: Optional[str] = None
    village_code: Optional[str] = None
    province: Optional[str] = None
    zip_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class OrderLine:
    id: int
    order_id: int
    product_id: int
    quantity: int
    price_at_order: Decimal
    product_name: Optional[str] = None
    product_image: Optional[str] = None


@dataclass(frozen=True)
class Order:
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
    address: Optional[Address] = None
    lines: List[OrderLine] = field(default_factory=list)


#sentinel for "field not sent" in patches, None is a valid value for nullable columns
class _Unset:
    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class AddressPatch:
    detail: object = UNSET
    city_id: object = UNSET
    district_id: object = UNSET
    village_code: object = UNSET
    province: object = UNSET
    zip_code: object = UNSET

    def is_empty(self) -> bool:
        return all(v is UNSET for v in self.__dict__.values())


@dataclass(frozen=True)
class ProductPatch:
    name: object = UNSET
    description: object = UNSET
    price: object = UNSET
    unit: object = UNSET
    stock: object = UNSET
    min_order: object = UNSET
    weight: object = UNSET
    harvest_date: object = UNSET
    image_path: object = UNSET
    category: object = UNSET
    origin_village_code: object = UNSET
    status: object = UNSET

    def is_empty(self) -> bool:
        return all(v is UNSET for v in self.__dict__.values())
