from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship

from agrimart.data.database import Base
from agrimart.domain.enums import OrderStatus


def _utcnow():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    status = Column(
        Enum(OrderStatus, native_enum=False, values_callable=lambda e: [m.value for m in e], length=16),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    payment_method = Column(String(32), nullable=False)
    total_product_price = Column(Numeric(12, 2), nullable=False)
    shipping_cost = Column(Numeric(12, 2), nullable=False)
    grand_total = Column(Numeric(12, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    address = relationship("AddressModel")
    items = relationship("OrderItemModel", back_populates="order", order_by="OrderItemModel.id")
