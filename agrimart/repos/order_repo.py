# agrimart/repos/order_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from agrimart.data.models.order import OrderModel
from agrimart.data.models.order_item import OrderItemModel
from agrimart.domain.entities import Order, OrderLine
from agrimart.domain.enums import OrderStatus
from agrimart.repos.address_repo import to_address


def to_order_line(row: OrderItemModel) -> OrderLine:
    product = row.product
    return OrderLine(
        id=row.id,
        order_id=row.order_id,
        product_id=row.product_id,
        quantity=row.quantity,
        price_at_order=row.price_at_order,
        product_name=product.name if product else None,
        product_image=product.image_path if product else None,
    )


def to_order(row: OrderModel, with_details: bool = True) -> Order:
    return Order(
        id=row.id,
        user_id=row.user_id,
        address_id=row.address_id,
        status=row.status,
        payment_method=row.payment_method,
        total_product_price=row.total_product_price,
        shipping_cost=row.shipping_cost,
        grand_total=row.grand_total,
        created_at=row.created_at,
        updated_at=row.updated_at,
        address=to_address(row.address) if with_details and row.address else None,
        lines=[to_order_line(i) for i in row.items] if with_details else [],
    )


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def _details_query(self):
        return select(OrderModel).options(
            selectinload(OrderModel.address),
            selectinload(OrderModel.items).selectinload(OrderItemModel.product),
        )

    def create_order(
        self,
        user_id: int,
        address_id: int,
        payment_method: str,
        total_product_price: Decimal,
        shipping_cost: Decimal,
        grand_total: Decimal,
    ) -> int:
        row = OrderModel(
            user_id=user_id,
            address_id=address_id,
            status=OrderStatus.PENDING,
            payment_method=payment_method,
            total_product_price=total_product_price,
            shipping_cost=shipping_cost,
            grand_total=grand_total,
        )
        self.db.add(row)
        self.db.flush()
        return row.id

    def add_order_line(self, order_id: int, product_id: int, quantity: int, price_at_order: Decimal) -> None:
        self.db.add(
            OrderItemModel(
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
                price_at_order=price_at_order,
            )
        )
        self.db.flush()

    def get_model(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order(self, order_id: int) -> Order | None:
        row = self.db.execute(
            self._details_query().where(OrderModel.id == order_id)
        ).scalar_one_or_none()
        return to_order(row) if row else None

    def list_orders(self, user_id: int) -> List[Order]:
        rows = self.db.execute(
            self._details_query()
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).scalars().all()
        return [to_order(r) for r in rows]

    def update_order_status(self, order_id: int, status: OrderStatus) -> OrderModel | None:
        order = self.get_model(order_id)
        if order:
            order.status = status
            self.db.flush()
        return order

    def commit(self):
        self.db.commit()
