#storefront/data/models/cart.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    cart_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # jeden koszyk na token sesji
    session_id = Column(String, nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    last_active = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
