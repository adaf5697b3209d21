from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(String(36), ForeignKey("carts.cart_id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String(36), nullable=False)
    selected_color = Column(String(32), nullable=False)

    quantity = Column(Integer, nullable=False)
    # snapshot z katalogu w momencie dodania
    price = Column(Numeric(10, 2), nullable=False)
    product_name = Column(String, nullable=False)
    image = Column(String, nullable=True)
    store_id = Column(String(36), nullable=False)
    store_name = Column(String, nullable=False)

    added_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "product_id", "selected_color", name="u_cart_product_color"),)
