#storefront/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    product_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    store_id = Column(String(36), ForeignKey("stores.store_id", ondelete="CASCADE"), nullable=False, index=True)

    product_name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    # suma inventory wszystkich wariantow, przeliczana przy kazdym debit
    total_inventory = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    store = relationship("StoreModel", back_populates="products")
    variants = relationship(
        "ColorVariantModel",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ColorVariantModel.id",
    )


class ColorVariantModel(Base):
    __tablename__ = "color_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(String(36), ForeignKey("products.product_id", ondelete="CASCADE"), nullable=False)

    color = Column(String(32), nullable=False)
    inventory = Column(Integer, nullable=False, default=0)
    image_urls = Column(JSON, nullable=False, default=list)

    product = relationship("ProductModel", back_populates="variants")

    __table_args__ = (UniqueConstraint("product_id", "color", name="u_product_color"),)
