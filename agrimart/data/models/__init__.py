#all models imported here so SQLAlchemy registers them in Base.metadata

from agrimart.data.models.user import UserModel
from agrimart.data.models.product import ProductModel
from agrimart.data.models.cart_item import CartItemModel
from agrimart.data.models.address import AddressModel
from agrimart.data.models.order import OrderModel
from agrimart.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
]
