from sqlalchemy import Column, String, DateTime, Numeric, JSON, Boolean
from datetime import datetime, timezone
import uuid

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    order_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String(32), nullable=False, unique=True)
    session_id = Column(String, nullable=False, index=True)

    # items / adres / podsumowania sklepow to kopie z momentu zlozenia zamowienia
    items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)
    store_summaries = Column(JSON, nullable=False)

    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    payment_method = Column(String(16), nullable=False)  # cash, card
    payment_status = Column(String(16), nullable=False, default="pending")  # pending, paid, failed, refunded
    order_status = Column(String(16), nullable=False, default="pending")

    # kroki 4/5 finalizacji, zapisywane w tej samej transakcji co debit / clear
    inventory_debited = Column(Boolean, nullable=False, default=False)
    cart_cleared = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    shipped_at = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    refunded_at = Column(DateTime(timezone=True), nullable=True)
