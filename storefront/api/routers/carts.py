#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import ensure_session_token, get_session_token
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartOut, CartTotalsOut
from storefront.domain.shipping import City
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(session_id)


@router.get("/totals", response_model=CartTotalsOut)
def get_totals(
    city: City = Query(...),
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).get_totals(session_id, city)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    session_id: str = Depends(ensure_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).add_item(
        session_id=session_id,
        product_id=payload.product_id,
        color=payload.selected_color,
        quantity=payload.quantity,
    )


@router.patch("/items", response_model=CartOut)
def set_quantity(
    payload: CartItemIn,
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).set_quantity(
        session_id=session_id,
        product_id=payload.product_id,
        color=payload.selected_color,
        quantity=payload.quantity,
    )


@router.delete("/items/{product_id}/{color}", response_model=CartOut)
def remove_item(
    product_id: str,
    color: str,
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).remove_item(session_id, product_id, color)


@router.delete("", response_model=CartOut)
def clear_cart(
    session_id: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    return get_service(db).clear(session_id)
