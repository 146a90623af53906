# agrimart/repos/product_repo.py
from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from agrimart.data.models.product import ProductModel
from agrimart.domain.entities import Product, ProductPatch, UNSET
from agrimart.domain.enums import ProductStatus


def to_product(row: ProductModel) -> Product:
    return Product(
        id=row.id,
        seller_id=row.seller_id,
        name=row.name,
        price=row.price,
        unit=row.unit,
        stock=row.stock,
        min_order=row.min_order,
        status=row.status,
        weight=row.weight or 0,
        description=row.description,
        harvest_date=row.harvest_date,
        image_path=row.image_path,
        category=row.category,
        origin_village_code=row.origin_village_code,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_model(self, product_id: int, include_deleted: bool = False) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        if not include_deleted:
            stmt = stmt.where(ProductModel.status != ProductStatus.DELETED)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_product(self, product_id: int, include_deleted: bool = False) -> Optional[Product]:
        row = self.get_model(product_id, include_deleted=include_deleted)
        return to_product(row) if row else None

    def list_products(
        self,
        category: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Product]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.status != ProductStatus.DELETED)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        )
        if category:
            stmt = stmt.where(ProductModel.category == category)
        if limit is not None:
            stmt = stmt.limit(limit)
            if offset:
                stmt = stmt.offset(offset)
        return [to_product(r) for r in self.db.execute(stmt).scalars().all()]

    def lock_products(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """
        Re-read products inside the caller's transaction with row locks
        (SELECT ... FOR UPDATE). Ordered by id so concurrent checkouts take
        locks in the same order.
        """
        ids = sorted(set(product_ids))
        if not ids:
            return {}
        stmt = (
            select(ProductModel)
            .where(ProductModel.id.in_(ids))
            .order_by(ProductModel.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        rows = self.db.execute(stmt).scalars().all()
        return {r.id: to_product(r) for r in rows}

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        #conditional update, stock never goes below zero
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
        )
        return result.rowcount == 1

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def apply_patch(self, row: ProductModel, patch: ProductPatch) -> ProductModel:
        #fixed set of assignments, only recognised fields can change
        if patch.name is not UNSET:
            row.name = patch.name
        if patch.description is not UNSET:
            row.description = patch.description
        if patch.price is not UNSET:
            row.price = patch.price
        if patch.unit is not UNSET:
            row.unit = patch.unit
        if patch.stock is not UNSET:
            row.stock = patch.stock
        if patch.min_order is not UNSET:
            row.min_order = patch.min_order
        if patch.weight is not UNSET:
            row.weight = patch.weight
        if patch.harvest_date is not UNSET:
            row.harvest_date = patch.harvest_date
        if patch.image_path is not UNSET:
            row.image_path = patch.image_path
        if patch.category is not UNSET:
            row.category = patch.category
        if patch.origin_village_code is not UNSET:
            row.origin_village_code = patch.origin_village_code
        if patch.status is not UNSET:
            row.status = patch.status
        self.db.flush()
        return row

    def commit(self):
        self.db.commit()
