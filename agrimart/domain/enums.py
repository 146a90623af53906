# agrimart/domain/enums.py
from enum import Enum


class ProductStatus(str, Enum):
    PRE_ORDER = "pre_order"
    READY_STOCK = "ready_stock"
    SOLD_OUT = "sold_out"
    DELETED = "deleted"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


_SELLABLE = {ProductStatus.PRE_ORDER, ProductStatus.READY_STOCK, ProductStatus.SOLD_OUT}

#deleted is terminal
PRODUCT_TRANSITIONS: dict[ProductStatus, frozenset[ProductStatus]] = {
    status: frozenset((_SELLABLE | {ProductStatus.DELETED}) - {status})
    for status in _SELLABLE
}
PRODUCT_TRANSITIONS[ProductStatus.DELETED] = frozenset()

#forward only, cancellation only while pending
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition_product(current: ProductStatus, target: ProductStatus) -> bool:
    if current == target:
        return True
    return target in PRODUCT_TRANSITIONS[current]


def can_transition_order(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[current]
