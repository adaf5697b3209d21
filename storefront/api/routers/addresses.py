from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import ensure_session_token, get_session_token
from storefront.data.database import get_db
from storefront.domain.schemas import AddressIn, AddressOut
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/address", tags=["address"])


@router.get("", response_model=AddressOut | None)
def get_address(
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return AddressService(db).get_address(session_id)


@router.put("", response_model=AddressOut)
def save_address(
    payload: AddressIn,
    session_id: str = Depends(ensure_session_token),
    db: Session = Depends(get_db),
):
    return AddressService(db).save_address(session_id, payload)
