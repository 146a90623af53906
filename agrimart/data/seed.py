from decimal import Decimal

from sqlalchemy.orm import Session

from agrimart.data.database import SessionLocal, init_db
from agrimart.data.models import ProductModel
from agrimart.domain.enums import ProductStatus, UserRole
from agrimart.repos.user_repo import UserRepo
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Beras Pandan Wangi", "price": Decimal("14500.00"), "unit": "kg", "stock": 500, "min_order": 5, "weight": 1000, "category": "grains", "status": ProductStatus.READY_STOCK},
    {"name": "Cabai Rawit", "price": Decimal("42000.00"), "unit": "kg", "stock": 40, "min_order": 1, "weight": 1000, "category": "vegetables", "status": ProductStatus.READY_STOCK},
    {"name": "Mangga Arumanis", "price": Decimal("25000.00"), "unit": "kg", "stock": 0, "min_order": 10, "weight": 1000, "category": "fruits", "status": ProductStatus.PRE_ORDER},
]


def seed(db: Session, origin_village_code: str = "3273010001") -> bool:
    users = UserRepo(db)
    #only seed an empty database
    if users.has_users():
        return False

    seller = users.add_user("Demo Seller", UserRole.SELLER)
    buyer = users.add_user("Demo Buyer", UserRole.BUYER)

    for data in PRODUCTS:
        db.add(ProductModel(seller_id=seller.id, origin_village_code=origin_village_code, **data))

    db.commit()
    logger.info(f"Seeded seller {seller.id}, buyer {buyer.id} and {len(PRODUCTS)} products")
    return True


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
