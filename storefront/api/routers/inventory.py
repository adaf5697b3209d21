from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import InventoryOut
from storefront.services.inventory_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/{product_id}/{color}", response_model=InventoryOut)
def get_stock(product_id: str, color: str, db: Session = Depends(get_db)):
    stock = InventoryService(db).current_stock(product_id, color)
    return InventoryOut(product_id=product_id, color=color, inventory=stock)
