#agrimart/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, Date, DateTime, Numeric, Enum, CheckConstraint

from agrimart.data.database import Base
from agrimart.domain.enums import ProductStatus


def _utcnow():
    return datetime.now(timezone.utc)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    unit = Column(String(32), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    min_order = Column(Integer, nullable=False, default=1)
    #grams, used for courier rate lookups
    weight = Column(Integer, nullable=False, default=0)

    status = Column(
        Enum(ProductStatus, native_enum=False, values_callable=lambda e: [m.value for m in e], length=16),
        nullable=False,
        default=ProductStatus.PRE_ORDER,
    )

    harvest_date = Column(Date, nullable=True)
    image_path = Column(String(255), nullable=True)
    category = Column(String(64), nullable=True, index=True)
    origin_village_code = Column(String(16), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("min_order >= 1", name="ck_products_min_order_positive"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )
