from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime, timezone
import uuid

from storefront.data.database import Base
from storefront.domain.shipping import City


class AddressModel(Base):
    __tablename__ = "addresses"

    address_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id = Column(String, nullable=False, unique=True, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    address = Column(String, nullable=False)
    building_number = Column(Integer, nullable=False)
    floor_number = Column(Integer, nullable=True)
    flat_number = Column(Integer, nullable=False)
    city = Column(Enum(City, name="city", values_callable=lambda e: [c.value for c in e]), nullable=False, default=City.CAIRO)
    district = Column(String(255), nullable=False)
    country = Column(String(32), nullable=False, default="Egypt")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
