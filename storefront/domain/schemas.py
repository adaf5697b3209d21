# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal
from datetime import datetime
from enum import Enum

from storefront.domain.checkout import CheckoutState, PaymentMethod, Step
from storefront.domain.shipping import City, Zone


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED})


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# cart


class CartItemIn(CamelModel):
    """Schema dla add / set-quantity / remove."""

    product_id: str = Field(..., min_length=1)
    selected_color: str = Field(..., min_length=1)
    # walidacja ilosci w serwisie, zeby odpowiedz miala ksztalt {success: false, error}
    quantity: int | None = None


class CartLineOut(CamelModel):
    product_id: str
    selected_color: str
    quantity: int
    price: Decimal
    product_name: str
    image: str | None = None
    store_id: str
    store_name: str
    added_at: datetime
    updated_at: datetime


class StoreGroupOut(CamelModel):
    store_id: str
    store_name: str
    items: List[CartLineOut]
    subtotal: Decimal


class CartOut(CamelModel):
    success: bool = True
    items: List[CartLineOut]
    stores: List[StoreGroupOut]
    subtotal: Decimal
    warning: str | None = None  # limit_reached / adjusted
    adjusted: bool = False
    max: int | None = None
    existing: int | None = None
    added: int | None = None


class CartTotalsOut(CamelModel):
    city: City
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    min_days: int
    max_days: int


# shipping / inventory


class ShippingEstimateOut(CamelModel):
    city: City
    zone: Zone
    min_days: int
    max_days: int
    rate: Decimal


class InventoryOut(CamelModel):
    product_id: str
    color: str
    inventory: int


# address


class AddressIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=20)
    address: str = Field(..., min_length=1)
    building_number: int = Field(..., gt=0)
    floor_number: int | None = Field(None, ge=0)
    flat_number: int = Field(..., gt=0)
    city: City = City.CAIRO
    district: str = Field(..., min_length=1, max_length=255)


class AddressOut(CamelModel):
    address_id: str
    name: str
    email: str
    phone: str
    address: str
    building_number: int
    floor_number: int | None = None
    flat_number: int
    city: City
    district: str
    country: str


# checkout


class StepIn(CamelModel):
    state: CheckoutState = Field(default_factory=CheckoutState)
    current_step: Step


class PaymentSelectIn(CamelModel):
    state: CheckoutState = Field(default_factory=CheckoutState)
    method: PaymentMethod


class StateIn(CamelModel):
    state: CheckoutState = Field(default_factory=CheckoutState)


class CanEnterOut(CamelModel):
    step: Step
    can_enter: bool


# orders


class OrderCreate(CamelModel):
    payment_method: PaymentMethod | None = None


class OrderItemOut(CamelModel):
    product_id: str
    selected_color: str
    quantity: int
    price: Decimal
    name: str
    image: str | None = None
    store_id: str
    store_name: str


class StoreSummaryOut(CamelModel):
    store_id: str
    store_name: str
    item_count: int
    subtotal: Decimal
    status: OrderStatus


class OrderOut(CamelModel):
    order_id: str
    order_number: str
    items: List[OrderItemOut]
    shipping_address: dict
    store_summaries: List[StoreSummaryOut]
    subtotal: Decimal
    shipping_cost: Decimal
    total: Decimal
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_status: OrderStatus
    created_at: datetime


class OrderPlacedOut(CamelModel):
    success: bool = True
    order_id: str
    order_number: str
    total: Decimal


class PaymentStatusIn(CamelModel):
    payment_status: PaymentStatus
    payment_method: PaymentMethod | None = None


class StoreStatusIn(CamelModel):
    status: OrderStatus
