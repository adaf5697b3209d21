# storefront/services/order_service.py
import secrets
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.domain import shipping
from storefront.domain.checkout import PaymentMethod
from storefront.domain.errors import (
    ConsistencyError,
    InfrastructureError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.domain.schemas import OrderStatus, PaymentStatus, TERMINAL_STATUSES
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.address_service import AddressService
from storefront.services.cart_service import CartService
from storefront.services.followup_service import FollowUpService
from storefront.services.inventory_service import InventoryService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

STATUS_TIMESTAMPS = {
    OrderStatus.CONFIRMED: "confirmed_at",
    OrderStatus.PROCESSING: "processed_at",
    OrderStatus.SHIPPED: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
    OrderStatus.REFUNDED: "refunded_at",
}


def _base36(number: int) -> str:
    digits = ""
    while number:
        number, rem = divmod(number, 36)
        digits = _BASE36[rem] + digits
    return digits or "0"


def generate_order_number() -> str:
    timestamp = _base36(int(time.time() * 1000))
    random_part = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"ORD-{timestamp}-{random_part}".upper()


def build_order_items(items: List[CartItemModel]) -> List[Dict[str, Any]]:
    return [
        {
            "product_id": i.product_id,
            "selected_color": i.selected_color,
            "quantity": i.quantity,
            "price": str(i.price),
            "name": i.product_name,
            "image": i.image,
            "store_id": i.store_id,
            "store_name": i.store_name,
        }
        for i in items
    ]


def build_store_summaries(order_items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Podzial pozycji zamowienia per sklep, kazdy sklep startuje jako pending."""
    summaries: Dict[str, Dict[str, Any]] = {}
    for item in order_items:
        summary = summaries.setdefault(
            item["store_id"],
            {
                "store_id": item["store_id"],
                "store_name": item["store_name"],
                "item_count": 0,
                "subtotal": Decimal("0.00"),
                "status": OrderStatus.PENDING.value,
            },
        )
        summary["item_count"] += item["quantity"]
        summary["subtotal"] += Decimal(item["price"]) * item["quantity"]

    return [{**s, "subtotal": str(s["subtotal"])} for s in summaries.values()]


def address_snapshot(address: AddressModel) -> Dict[str, Any]:
    return {
        "name": address.name,
        "email": address.email,
        "phone": address.phone,
        "address": address.address,
        "building_number": address.building_number,
        "floor_number": address.floor_number,
        "flat_number": address.flat_number,
        "city": shipping.City(address.city).value,
        "district": address.district,
        "country": address.country,
    }


class OrderService:
    """
    Finalizacja zamowienia i zapytania o zamowienia.

    Kolejnosc w place_order jest celowa: najpierw zapis zamowienia, potem
    debit magazynu i czyszczenie koszyka. Blad w dwoch ostatnich krokach nie
    cofa zamowienia, tylko zleca ponowienie w tle.
    """

    def __init__(
        self,
        db: Session,
        inventory: InventoryService | None = None,
        followup: FollowUpService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.inventory = inventory or InventoryService(db)
        self.cart_service = CartService(db, inventory=self.inventory)
        self.address_service = AddressService(db)
        self.followup = followup or FollowUpService()

    #commands
    def place_order_for_session(self, session_id: str | None, payment_method: Any) -> OrderModel:
        """Skleja koszyk i adres sesji po stronie serwera, klientowi nie ufamy."""
        items = self.cart_service.get_items(session_id)
        address = self.address_service.get_address(session_id)
        return self.place_order(session_id, items, address, payment_method)

    def place_order(
        self,
        session_id: str | None,
        items: List[CartItemModel],
        address: AddressModel | None,
        payment_method: Any,
    ) -> OrderModel:
        if not session_id:
            raise ValidationError("Session token is required")
        if not items:
            raise ConsistencyError("Cart is empty")
        if address is None:
            raise ConsistencyError("Shipping address is required")
        if payment_method is None:
            raise ConsistencyError("Payment method is required")
        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError(f"Unknown payment method {payment_method}")

        totals = shipping.cost(items, address.city)
        order_items = build_order_items(items)

        order = OrderModel(
            order_number=generate_order_number(),
            session_id=session_id,
            items=order_items,
            shipping_address=address_snapshot(address),
            store_summaries=build_store_summaries(order_items),
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping,
            total=totals.total,
            payment_method=method.value,
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PENDING.value,
        )

        try:
            created = self.repo.create_order(order)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Persisting order failed: {e}")
            raise InfrastructureError("Failed to create order") from e

        logger.info(
            f"Order {created.order_number} placed: subtotal {totals.subtotal}, "
            f"shipping {totals.shipping}, total {totals.total}"
        )

        # od tego miejsca zamowienie jest zlozone, bledy tylko loguje i ponawiam w tle
        try:
            self.inventory.debit_for_order(created.order_id)
        except StorefrontError as e:
            logger.error(f"Inventory debit for order {created.order_number} failed: {e}")
            self._schedule(self.followup.retry_inventory_debit, created, "inventory debit")

        try:
            self.clear_cart_for_order(created.order_id)
        except StorefrontError as e:
            logger.error(f"Cart clear for order {created.order_number} failed: {e}")
            self._schedule(self.followup.retry_cart_clear, created, "cart clear")

        return created

    @staticmethod
    def _schedule(dispatch, order: OrderModel, step: str) -> None:
        # zamowienie jest juz zapisane, blad brokera nie moze go cofnac
        try:
            dispatch(order.order_id)
        except Exception as e:
            logger.error(f"Scheduling {step} retry for order {order.order_number} failed: {e}")

    def clear_cart_for_order(self, order_id: str) -> bool:
        """Czysci koszyk sesji zamowienia dokladnie raz (flaga cart_cleared)."""
        try:
            order = self.repo.get_order_for_update(order_id)
            if not order:
                raise NotFoundError(f"Order {order_id} not found")

            if order.cart_cleared:
                self.db.rollback()
                return False

            cart = self.carts.get_cart_by_session(order.session_id)
            removed = self.carts.delete_cart_items(cart.cart_id) if cart else 0
            order.cart_cleared = True
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Cart clear for order {order_id} failed: {e}")
            raise InfrastructureError("Failed to clear cart") from e

        logger.info(f"Cart cleared after order {order_id} ({removed} lines)")
        return True

    def update_payment_status(self, order_id: str, payment_status: Any, payment_method: Any = None) -> OrderModel:
        """Callback platnosci zewnetrznej, ustawia tylko pola statusu."""
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        order.payment_status = PaymentStatus(payment_status).value
        if payment_method is not None:
            order.payment_method = PaymentMethod(payment_method).value

        self._commit("update payment status")
        logger.info(f"Order {order.order_number} payment status -> {order.payment_status}")
        return self.repo.refresh(order)

    def update_store_status(self, order_id: str, store_id: str, status: Any) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        status = OrderStatus(status)
        if not any(s["store_id"] == store_id for s in order.store_summaries):
            raise NotFoundError(f"Store {store_id} is not part of order {order.order_number}")

        # nowa lista, bo SQLAlchemy nie sledzi mutacji wewnatrz JSON
        summaries = [
            {**s, "status": status.value} if s["store_id"] == store_id else s
            for s in order.store_summaries
        ]
        order.store_summaries = summaries

        if all(OrderStatus(s["status"]) in TERMINAL_STATUSES for s in summaries):
            order.order_status = OrderStatus.DELIVERED.value

        timestamp_field = STATUS_TIMESTAMPS.get(status)
        if timestamp_field:
            setattr(order, timestamp_field, datetime.now(timezone.utc))

        self._commit("update store status")
        logger.info(f"Order {order.order_number}: store {store_id} -> {status.value}")
        return self.repo.refresh(order)

    #query
    def get_order(self, session_id: str | None, order_id: str) -> OrderModel:
        order = self.repo.get_session_order(session_id, order_id) if session_id else None
        if not order:
            raise NotFoundError("Order not found")
        return order

    def get_order_by_number(self, session_id: str | None, order_number: str) -> OrderModel:
        order = self.repo.get_by_order_number(session_id, order_number.upper()) if session_id else None
        if not order:
            raise NotFoundError("Order not found")
        return order

    def list_orders(self, session_id: str | None) -> List[OrderModel]:
        if not session_id:
            return []
        return self.repo.list_orders(session_id)

    def _commit(self, action: str):
        try:
            self.repo.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order {action} failed: {e}")
            raise InfrastructureError(f"Failed to {action}") from e
