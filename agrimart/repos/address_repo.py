# agrimart/repos/address_repo.py
from typing import List

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from agrimart.data.models.address import AddressModel
from agrimart.data.models.order import OrderModel
from agrimart.domain.entities import Address, AddressPatch, UNSET


def to_address(row: AddressModel) -> Address:
    return Address(
        id=row.id,
        user_id=row.user_id,
        detail=row.detail,
        city_id=row.city_id,
        district_id=row.district_id,
        village_code=row.village_code,
        province=row.province,
        zip_code=row.zip_code,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_model(self, address_id: int, user_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def get_address(self, address_id: int, user_id: int) -> Address | None:
        row = self.get_model(address_id, user_id)
        return to_address(row) if row else None

    def list_addresses(self, user_id: int) -> List[Address]:
        rows = self.db.execute(
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(AddressModel.id)
        ).scalars().all()
        return [to_address(r) for r in rows]

    def is_referenced_by_order(self, address_id: int) -> bool:
        return self.db.execute(
            select(exists().where(OrderModel.address_id == address_id))
        ).scalar()

    def add_address(self, row: AddressModel) -> AddressModel:
        self.db.add(row)
        self.db.flush()
        return row

    def apply_patch(self, row: AddressModel, patch: AddressPatch) -> AddressModel:
        if patch.detail is not UNSET:
            row.detail = patch.detail
        if patch.city_id is not UNSET:
            row.city_id = patch.city_id
        if patch.district_id is not UNSET:
            row.district_id = patch.district_id
        if patch.village_code is not UNSET:
            row.village_code = patch.village_code
        if patch.province is not UNSET:
            row.province = patch.province
        if patch.zip_code is not UNSET:
            row.zip_code = patch.zip_code
        self.db.flush()
        return row

    def delete_address(self, row: AddressModel) -> None:
        self.db.delete(row)
        self.db.flush()

    def commit(self):
        self.db.commit()
