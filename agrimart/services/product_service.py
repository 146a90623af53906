# agrimart/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from agrimart.data.models.product import ProductModel
from agrimart.domain.entities import CurrentUser, Product, ProductPatch, UNSET
from agrimart.domain.enums import ProductStatus, UserRole, can_transition_product
from agrimart.domain.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from agrimart.repos.product_repo import ProductRepo, to_product
from agrimart.repos.user_repo import UserRepo
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)

#columns that can not be set to NULL through a patch
_REQUIRED = ("name", "price", "unit", "stock", "min_order", "weight", "status")


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.users = UserRepo(db)

    def list_products(self, category: str | None = None, limit: int | None = None, offset: int | None = None) -> List[Product]:
        if limit is not None and limit < 1:
            raise ValidationError("Invalid limit parameter")
        if offset is not None and offset < 0:
            raise ValidationError("Invalid offset parameter")
        return self.repo.list_products(category=category, limit=limit, offset=offset)

    def get_product(self, product_id: int) -> Product:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, user: CurrentUser, data: dict) -> Product:
        if user.role == UserRole.BUYER:
            raise ForbiddenError("Buyers cannot create products")
        if user.role == UserRole.SELLER and data["seller_id"] != user.id:
            raise ForbiddenError("You can only create products for yourself")
        if data.get("status") == ProductStatus.DELETED:
            raise ValidationError("Invalid status for a new product")
        if not self.users.is_seller(data["seller_id"]):
            raise NotFoundError("Seller not found")

        row = self.repo.add_product(ProductModel(**data))
        self.repo.commit()
        logger.info(f"Product {row.id} created by user {user.id} for seller {row.seller_id}")
        return to_product(row)

    def update_product(self, user: CurrentUser, product_id: int, patch: ProductPatch) -> Product:
        if patch.is_empty():
            raise ValidationError("No fields to update provided")
        for name in _REQUIRED:
            if getattr(patch, name) is None:
                raise ValidationError(f"{name} cannot be null")

        row = self._owned(user, product_id)

        if patch.status is not UNSET:
            current = ProductStatus(row.status)
            if not can_transition_product(current, ProductStatus(patch.status)):
                raise ConflictError(f"Cannot change product status from {current.value} to {patch.status}")

        self.repo.apply_patch(row, patch)
        self.repo.commit()
        logger.info(f"Product {product_id} updated by user {user.id}")
        return to_product(row)

    def delete_product(self, user: CurrentUser, product_id: int) -> None:
        row = self._owned(user, product_id)
        #soft delete, order lines keep referencing the row
        self.repo.apply_patch(row, ProductPatch(status=ProductStatus.DELETED))
        self.repo.commit()
        logger.info(f"Product {product_id} deleted by user {user.id}")

    def _owned(self, user: CurrentUser, product_id: int) -> ProductModel:
        row = self.repo.get_model(product_id)
        if not row:
            raise NotFoundError("Product not found")
        if not user.is_admin and row.seller_id != user.id:
            raise ForbiddenError("You can only modify your own products")
        return row
