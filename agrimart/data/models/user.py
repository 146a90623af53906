from sqlalchemy import Column, Integer, String, Enum
from agrimart.data.database import Base
from agrimart.domain.enums import UserRole


class UserModel(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    role = Column(
        Enum(UserRole, native_enum=False, values_callable=lambda e: [m.value for m in e], length=16),
        nullable=False,
        default=UserRole.BUYER,
    )
