# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_token
from storefront.data.database import get_db
from storefront.domain.schemas import (
    OrderCreate,
    OrderOut,
    OrderPlacedOut,
    PaymentStatusIn,
    StoreStatusIn,
)
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderPlacedOut, status_code=201)
def place_order(
    payload: OrderCreate,
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    """
    Sklada zamowienie z koszyka i zapisanego adresu sesji.
    """
    order = get_service(db).place_order_for_session(session_id, payload.payment_method)
    return OrderPlacedOut(order_id=order.order_id, order_number=order.order_number, total=order.total)


@router.get("", response_model=List[OrderOut])
def list_orders(
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(session_id)


@router.get("/by-number/{order_number}", response_model=OrderOut)
def get_order_by_number(
    order_number: str,
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order_by_number(session_id, order_number)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(session_id, order_id)


@router.post("/{order_id}/payment", response_model=OrderOut)
def update_payment_status(
    order_id: str,
    payload: PaymentStatusIn,
    db: Session = Depends(get_db),
):
    """
    Callback platnosci zewnetrznej (np. karta), tylko pola statusu.
    """
    return get_service(db).update_payment_status(order_id, payload.payment_status, payload.payment_method)


@router.patch("/{order_id}/stores/{store_id}", response_model=OrderOut)
def update_store_status(
    order_id: str,
    store_id: str,
    payload: StoreStatusIn,
    db: Session = Depends(get_db),
):
    return get_service(db).update_store_status(order_id, store_id, payload.status)
