# agrimart/repos/cart_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, delete, update
from sqlalchemy.orm import Session

from agrimart.data.models.cart_item import CartItemModel
from agrimart.data.models.product import ProductModel
from agrimart.domain.entities import CartLine, CartLineView
from agrimart.domain.enums import ProductStatus
from agrimart.repos.product_repo import to_product


def to_cart_line(row: CartItemModel) -> CartLine:
    return CartLine(
        id=row.id,
        user_id=row.user_id,
        product_id=row.product_id,
        quantity=row.quantity,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_line(self, user_id: int, product_id: int) -> CartLine | None:
        row = self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()
        return to_cart_line(row) if row else None

    def get_line_by_id(self, user_id: int, line_id: int) -> CartLine | None:
        row = self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == line_id,
                CartItemModel.user_id == user_id,
            )
        ).scalar_one_or_none()
        return to_cart_line(row) if row else None

    def get_lines(self, user_id: int) -> List[CartLine]:
        rows = self.db.execute(
            select(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        ).scalars().all()
        return [to_cart_line(r) for r in rows]

    def get_line_views(self, user_id: int) -> List[CartLineView]:
        rows = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(
                CartItemModel.user_id == user_id,
                ProductModel.status != ProductStatus.DELETED,
            )
            .order_by(CartItemModel.id)
        ).all()
        return [CartLineView(line=to_cart_line(c), product=to_product(p)) for c, p in rows]

    def add_line(self, user_id: int, product_id: int, quantity: int) -> CartLine:
        row = CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
        self.db.add(row)
        self.db.flush()
        return to_cart_line(row)

    def set_quantity(self, user_id: int, product_id: int, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount

    def delete_line(self, user_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
