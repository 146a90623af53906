from decimal import Decimal

from sqlalchemy.orm import Session

from agrimart.domain.availability import ensure_available
from agrimart.domain.entities import CartSummary
from agrimart.domain.errors import NotFoundError, ValidationError
from agrimart.repos.cart_repo import CartRepo
from agrimart.repos.product_repo import ProductRepo
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases for a user's cart.

    commands (add, set, delta, remove) are read-then-write sequences,
    each one commits on its own; list is a plain point-in-time read.
    A line is either present with quantity > 0 or absent, it is never
    stored with 0.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def list_cart(self, user_id: int) -> CartSummary:
        views = self.repo.get_line_views(user_id)
        return CartSummary(
            lines=views,
            total_weight=sum(v.weight for v in views),
            total_price=sum((v.subtotal for v in views), Decimal("0.00")),
        )

    #commands
    def add_or_increment(self, user_id: int, product_id: int, quantity: int) -> int:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found or deleted")

        existing = self.repo.get_line(user_id, product_id)
        existing_quantity = existing.quantity if existing else 0

        ensure_available(product, quantity, existing_quantity=existing_quantity)

        try:
            if existing:
                logger.info(
                    f"Product {product_id} already in cart of user {user_id}, "
                    f"quantity {existing_quantity} -> {existing_quantity + quantity}"
                )
                self.repo.set_quantity(user_id, product_id, existing_quantity + quantity)
            else:
                logger.info(f"Adding product {product_id} to cart of user {user_id}")
                self.repo.add_line(user_id, product_id, quantity)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return existing_quantity + quantity

    def set_quantity(self, user_id: int, product_id: int, quantity: int) -> int:
        if quantity < 0:
            raise ValidationError("Quantity must be non-negative")

        line = self.repo.get_line(user_id, product_id)
        if not line:
            raise NotFoundError("Product not found in cart")

        return self._set_line(line.user_id, line.product_id, quantity)

    def set_line_quantity(self, user_id: int, line_id: int, quantity: int) -> int:
        if quantity < 0:
            raise ValidationError("Quantity must be non-negative")

        line = self.repo.get_line_by_id(user_id, line_id)
        if not line:
            raise NotFoundError("Cart item not found or does not belong to user")

        return self._set_line(line.user_id, line.product_id, quantity)

    def _set_line(self, user_id: int, product_id: int, quantity: int) -> int:
        if quantity == 0:
            self.repo.delete_line(user_id, product_id)
            self.repo.commit()
            logger.info(f"Product {product_id} removed from cart of user {user_id} (quantity 0)")
            return 0

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found or deleted")

        #absolute quantity, not cumulative
        ensure_available(product, quantity)

        self.repo.set_quantity(user_id, product_id, quantity)
        self.repo.commit()
        logger.info(f"Cart line {user_id}/{product_id} set to {quantity}")
        return quantity

    def apply_delta(self, user_id: int, product_id: int, delta: int) -> int:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Delta must be an integer (e.g. +2, -1)")

        line = self.repo.get_line(user_id, product_id)
        if not line:
            raise NotFoundError("Product not found in cart")

        new_quantity = line.quantity + delta

        if new_quantity <= 0:
            self.repo.delete_line(user_id, product_id)
            self.repo.commit()
            logger.info(f"Product {product_id} removed from cart of user {user_id} (quantity <= 0)")
            return 0

        product = self.products.get_product(product_id)
        if not product:
            #product deleted after it was put in the cart, drop the stale line
            self.repo.delete_line(user_id, product_id)
            self.repo.commit()
            logger.warning(f"Product {product_id} no longer available, removed from cart of user {user_id}")
            raise NotFoundError("Product is no longer available")

        ensure_available(product, new_quantity)

        self.repo.set_quantity(user_id, product_id, new_quantity)
        self.repo.commit()
        logger.info(f"Cart line {user_id}/{product_id} changed by {delta:+d} to {new_quantity}")
        return new_quantity

    def remove(self, user_id: int, product_id: int) -> None:
        rowcount = self.repo.delete_line(user_id, product_id)
        if rowcount == 0:
            self.repo.rollback()
            raise NotFoundError("Product not found in cart")
        self.repo.commit()
        logger.info(f"Product {product_id} removed from cart of user {user_id}")

    def remove_line(self, user_id: int, line_id: int) -> None:
        line = self.repo.get_line_by_id(user_id, line_id)
        if not line:
            raise NotFoundError("Cart item not found or does not belong to user")
        self.remove(user_id, line.product_id)
