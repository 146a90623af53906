from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime

from agrimart.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    detail = Column(Text, nullable=False)
    city_id = Column(String(16), nullable=True)
    district_id = Column(String(16), nullable=True)
    village_code = Column(String(16), nullable=True)
    province = Column(String(100), nullable=True)
    zip_code = Column(String(10), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
