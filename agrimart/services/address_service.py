# agrimart/services/address_service.py
from typing import List

from sqlalchemy.orm import Session

from agrimart.data.models.address import AddressModel
from agrimart.domain.entities import Address, AddressPatch, UNSET
from agrimart.domain.errors import ConflictError, NotFoundError, ValidationError
from agrimart.repos.address_repo import AddressRepo, to_address
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)

NOT_FOUND = "Address not found or does not belong to user."


class AddressService:
    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def list_addresses(self, user_id: int) -> List[Address]:
        return self.repo.list_addresses(user_id)

    def create_address(self, user_id: int, data: dict) -> Address:
        row = self.repo.add_address(AddressModel(user_id=user_id, **data))
        self.repo.commit()
        logger.info(f"Address {row.id} added for user {user_id}")
        return to_address(row)

    def replace_address(self, user_id: int, address_id: int, data: dict) -> Address:
        patch = AddressPatch(
            detail=data.get("detail"),
            city_id=data.get("city_id"),
            district_id=data.get("district_id"),
            village_code=data.get("village_code"),
            province=data.get("province"),
            zip_code=data.get("zip_code"),
        )
        return self.update_address(user_id, address_id, patch)

    def update_address(self, user_id: int, address_id: int, patch: AddressPatch) -> Address:
        if patch.is_empty():
            raise ValidationError("No fields provided for update.")
        if patch.detail is not UNSET and not patch.detail:
            raise ValidationError("Address detail cannot be empty.")

        row = self._owned_and_unreferenced(user_id, address_id)
        self.repo.apply_patch(row, patch)
        self.repo.commit()
        logger.info(f"Address {address_id} of user {user_id} updated")
        return to_address(row)

    def delete_address(self, user_id: int, address_id: int) -> None:
        row = self._owned_and_unreferenced(user_id, address_id)
        self.repo.delete_address(row)
        self.repo.commit()
        logger.info(f"Address {address_id} of user {user_id} deleted")

    def _owned_and_unreferenced(self, user_id: int, address_id: int) -> AddressModel:
        row = self.repo.get_model(address_id, user_id)
        if not row:
            raise NotFoundError(NOT_FOUND)
        #placed orders keep pointing at the address they shipped to
        if self.repo.is_referenced_by_order(address_id):
            raise ConflictError("Address is used by an order and cannot be changed.")
        return row
