# agrimart/api/routers/addresses.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrimart.api.deps import get_current_user
from agrimart.api.errors import http_error
from agrimart.data.database import get_db
from agrimart.domain.entities import AddressPatch, CurrentUser
from agrimart.domain.errors import MarketError
from agrimart.domain.schemas import (
    AddressIn,
    AddressListOut,
    AddressOut,
    AddressPatchIn,
    AddressResultOut,
    MessageOut,
)
from agrimart.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


def get_service(db: Session):
    return AddressService(db)


@router.get("", response_model=AddressListOut)
def list_addresses(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    addresses = get_service(db).list_addresses(user.id)
    return AddressListOut(addresses=[AddressOut.model_validate(a) for a in addresses])


@router.post("", response_model=AddressResultOut, status_code=201)
def create_address(
    payload: AddressIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    address = get_service(db).create_address(user.id, payload.model_dump())
    return AddressResultOut(address=AddressOut.model_validate(address))


@router.put("/{address_id}", response_model=AddressResultOut)
def replace_address(
    address_id: int,
    payload: AddressIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        address = svc.replace_address(user.id, address_id, payload.model_dump())
    except MarketError as e:
        raise http_error(e)
    return AddressResultOut(address=AddressOut.model_validate(address), message="Address updated successfully.")


@router.patch("/{address_id}", response_model=AddressResultOut)
def update_address(
    address_id: int,
    payload: AddressPatchIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    #only the fields the client actually sent
    patch = AddressPatch(**{name: getattr(payload, name) for name in payload.model_fields_set})
    svc = get_service(db)
    try:
        address = svc.update_address(user.id, address_id, patch)
    except MarketError as e:
        raise http_error(e)
    return AddressResultOut(address=AddressOut.model_validate(address), message="Address updated successfully.")


@router.delete("/{address_id}", response_model=MessageOut)
def delete_address(
    address_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_address(user.id, address_id)
    except MarketError as e:
        raise http_error(e)
    return MessageOut(message="Address deleted successfully.")
