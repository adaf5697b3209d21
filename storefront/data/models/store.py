from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from storefront.data.database import Base


class StoreModel(Base):
    __tablename__ = "stores"

    store_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    store_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    products = relationship("ProductModel", back_populates="store")
