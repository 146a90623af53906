# agrimart/services/checkout_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from agrimart.domain.availability import RejectReason, evaluate
from agrimart.domain.errors import (
    NotFoundError,
    StockConflictError,
    ValidationError,
)
from agrimart.repos.address_repo import AddressRepo
from agrimart.repos.cart_repo import CartRepo
from agrimart.repos.order_repo import OrderRepo
from agrimart.repos.product_repo import ProductRepo
from agrimart.services.notification_service import NotificationService
from agrimart.services.quote_store import QuoteStore
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)

MONEY = Decimal("0.01")


class CheckoutService:
    """
    Turns a user's whole cart into a pending order.

    Everything between the first read and the commit runs in the request
    session's transaction: product rows are re-read with FOR UPDATE, stock
    is decremented with a conditional UPDATE and any failure rolls back
    the order, its lines, the stock changes and the cart deletion together.
    """

    def __init__(
        self,
        db: Session,
        notifier: NotificationService | None = None,
        quote_store: QuoteStore | None = None,
    ):
        self.db = db
        self.addresses = AddressRepo(db)
        self.cart = CartRepo(db)
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.notifier = notifier
        self.quote_store = quote_store

    def checkout(
        self,
        user_id: int,
        address_id: int,
        shipping_cost: Decimal,
        payment_method: str,
        total_amount: Decimal | None = None,
    ) -> int:
        shipping_cost = Decimal(str(shipping_cost)).quantize(MONEY)
        if shipping_cost < 0:
            raise ValidationError("Shipping cost must be non-negative")
        if not payment_method:
            raise ValidationError("Payment method is required")

        try:
            order_id = self._place_order(user_id, address_id, shipping_cost, payment_method, total_amount)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Checkout for user {user_id} rolled back: {e}")
            raise

        logger.info(f"Order {order_id} created from cart of user {user_id}")

        #after commit, the order stays even if the broker is down
        if self.notifier is not None:
            try:
                self.notifier.send_order_placed(user_id, order_id)
            except Exception as e:
                logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")

        return order_id

    def _place_order(
        self,
        user_id: int,
        address_id: int,
        shipping_cost: Decimal,
        payment_method: str,
        total_amount: Decimal | None,
    ) -> int:
        # 1. address
        address = self.addresses.get_address(address_id, user_id)
        if address is None:
            raise NotFoundError("Address not found or does not belong to user")

        # 2. cart
        lines = self.cart.get_lines(user_id)
        if not lines:
            raise ValidationError("Cart is empty")

        # 3. fresh product rows under lock, re-validated
        products = self.products.lock_products(line.product_id for line in lines)

        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError(f"Product {line.product_id} not found or deleted")

            decision = evaluate(product, line.quantity)
            if not decision.accepted and decision.reason != RejectReason.INSUFFICIENT_STOCK:
                raise StockConflictError(
                    f"Product {line.product_id}: {decision.message}",
                    product_id=line.product_id,
                )
            if product.stock < line.quantity:
                raise StockConflictError(
                    f"Stock for product {line.product_id} is insufficient",
                    product_id=line.product_id,
                )

        if self.quote_store is not None:
            weight = sum(products[line.product_id].weight * line.quantity for line in lines)
            if not self.quote_store.is_quoted(user_id, address.village_code, weight, shipping_cost):
                raise ValidationError("Shipping cost was not quoted for this address and cart weight")

        # 4. server side totals
        total_product_price = sum(
            (products[line.product_id].price * line.quantity for line in lines),
            Decimal("0.00"),
        ).quantize(MONEY)
        grand_total = total_product_price + shipping_cost

        if total_amount is not None and Decimal(str(total_amount)).quantize(MONEY) != grand_total:
            raise ValidationError(
                f"Total amount mismatch, expected {grand_total}"
            )

        # 5. order, lines, stock, cart
        order_id = self.orders.create_order(
            user_id=user_id,
            address_id=address_id,
            payment_method=payment_method,
            total_product_price=total_product_price,
            shipping_cost=shipping_cost,
            grand_total=grand_total,
        )

        for line in lines:
            if not self.products.decrement_stock(line.product_id, line.quantity):
                raise StockConflictError(
                    f"Stock for product {line.product_id} is insufficient",
                    product_id=line.product_id,
                )
            self.orders.add_order_line(
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                price_at_order=products[line.product_id].price,
            )

        self.cart.clear(user_id)
        return order_id
