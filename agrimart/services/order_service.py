# agrimart/services/order_service.py
from typing import List

from sqlalchemy.orm import Session

from agrimart.domain.entities import CurrentUser, Order
from agrimart.domain.enums import OrderStatus, can_transition_order
from agrimart.domain.errors import ConflictError, ForbiddenError, NotFoundError
from agrimart.repos.order_repo import OrderRepo
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Read path and status lifecycle of orders. Orders themselves are only
    created by CheckoutService.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def list_orders(self, user_id: int) -> List[Order]:
        return self.repo.list_orders(user_id)

    def get_order(self, order_id: int, user: CurrentUser) -> Order:
        order = self.repo.get_order(order_id)
        #someone else's order looks exactly like a missing one
        if not order or (order.user_id != user.id and not user.is_admin):
            raise NotFoundError("Order not found or does not belong to user")
        return order

    def change_status(self, order_id: int, status: OrderStatus, user: CurrentUser) -> Order:
        if not user.is_admin:
            raise ForbiddenError("Only administrators can change order status")

        row = self.repo.get_model(order_id)
        if not row:
            raise NotFoundError("Order not found")

        current = OrderStatus(row.status)
        if not can_transition_order(current, status):
            raise ConflictError(f"Cannot change order status from {current.value} to {status.value}")

        self.repo.update_order_status(order_id, status)
        self.repo.commit()
        logger.info(f"Order {order_id} status {current.value} -> {status.value}")
        return self.repo.get_order(order_id)

    def cancel_order(self, order_id: int, user: CurrentUser) -> Order:
        row = self.repo.get_model(order_id)
        if not row or row.user_id != user.id:
            raise NotFoundError("Order not found or does not belong to user")

        current = OrderStatus(row.status)
        if not can_transition_order(current, OrderStatus.CANCELLED):
            raise ConflictError(f"Only pending orders can be cancelled (status: {current.value})")

        #soft delete, the row stays
        self.repo.update_order_status(order_id, OrderStatus.CANCELLED)
        self.repo.commit()
        logger.info(f"Order {order_id} cancelled by user {user.id}")
        return self.repo.get_order(order_id)
