# storefront/services/cart_service.py
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain import shipping
from storefront.domain.errors import InfrastructureError, NotFoundError, ValidationError
from storefront.domain.shipping import City
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.inventory_service import InventoryService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

LIMIT_REACHED = "limit_reached"
ADJUSTED = "adjusted"


def _parse_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Quantity must be an integer")
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Quantity must be an integer")
    if isinstance(value, float) and value != quantity:
        raise ValidationError("Quantity must be an integer")
    return quantity


class CartService:
    """
    Koszyk per token sesji.

    commands (add, set_quantity, remove, clear) modyfikuja stan, query (get_cart,
    get_totals) tylko odczyt. Kazda komenda zwiekszajaca ilosc czyta stan
    magazynu w momencie zapisu i przycina ilosc do niego, koszyk nie rezerwuje
    towaru.
    """

    def __init__(self, db: Session, inventory: InventoryService | None = None):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.inventory = inventory or InventoryService(db)

    #query - odczyt
    def get_cart(self, session_id: str | None) -> Dict[str, Any]:
        # brak tokenu albo brak koszyka == pusty koszyk
        if not session_id:
            return self._view([])

        cart = self.repo.get_cart_by_session(session_id)
        if not cart:
            return self._view([])

        return self._view(self.repo.get_cart_items(cart.cart_id))

    def get_items(self, session_id: str | None) -> List[CartItemModel]:
        if not session_id:
            return []
        cart = self.repo.get_cart_by_session(session_id)
        if not cart:
            return []
        return self.repo.get_cart_items(cart.cart_id)

    def get_totals(self, session_id: str | None, city: City) -> Dict[str, Any]:
        items = self.get_items(session_id)
        totals = shipping.cost(items, city)
        estimate = shipping.estimate(city)
        return {
            "city": City(city),
            "subtotal": totals.subtotal,
            "shipping": totals.shipping,
            "total": totals.total,
            "min_days": estimate.min_days,
            "max_days": estimate.max_days,
        }

    #commands
    def add_item(
        self,
        session_id: str,
        product_id: str,
        color: str,
        quantity: Any = 1,
    ) -> Dict[str, Any]:
        self._require_session(session_id)
        quantity = _parse_quantity(1 if quantity is None else quantity)
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        # swiezy odczyt stanu przy kazdym zapisie
        stock = self.inventory.current_stock(product_id, color)

        with self._write("add"):
            cart = self._get_or_create_cart(session_id)
            line = self.repo.get_cart_item(cart.cart_id, product_id, color)
            existing = line.quantity if line else 0

            # nowa linia zawsze startuje od 1, niezaleznie od quantity
            desired = existing + quantity if line else 1
            target, outcome = self._clamp(desired, existing, stock)

            if line:
                self._apply(line, target)
                logger.info(
                    f"Cart {cart.cart_id}: product {product_id}/{color} "
                    f"quantity {existing} -> {target} (stock {stock})"
                )
            elif target >= 1:
                variant = self.products.get_variant(product_id, color)
                now = datetime.now(timezone.utc)
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.cart_id,
                        product_id=product_id,
                        selected_color=color,
                        quantity=target,
                        price=product.price,
                        product_name=product.product_name,
                        image=variant.image_urls[0] if variant.image_urls else None,
                        store_id=product.store_id,
                        store_name=product.store.store_name,
                        added_at=now,
                        updated_at=now,
                    )
                )
                logger.info(f"Cart {cart.cart_id}: added product {product_id}/{color}")

            self._touch(cart)

        return self._view(self.repo.get_cart_items(cart.cart_id), **outcome)

    def set_quantity(
        self,
        session_id: str | None,
        product_id: str,
        color: str,
        quantity: Any,
    ) -> Dict[str, Any]:
        quantity = _parse_quantity(quantity)

        if quantity <= 0:
            return self.remove_item(session_id, product_id, color)

        cart = self.repo.get_cart_by_session(session_id) if session_id else None
        if not cart:
            return self._view([])

        line = self.repo.get_cart_item(cart.cart_id, product_id, color)
        if not line:
            return self._view(self.repo.get_cart_items(cart.cart_id))

        variant = self.products.get_variant(product_id, color)
        stock = variant.inventory if variant else 0

        with self._write("update"):
            existing = line.quantity
            target, outcome = self._clamp(quantity, existing, stock)
            self._apply(line, target)
            self._touch(cart)

        logger.info(
            f"Cart {cart.cart_id}: set product {product_id}/{color} "
            f"quantity {existing} -> {target} (requested {quantity}, stock {stock})"
        )
        return self._view(self.repo.get_cart_items(cart.cart_id), **outcome)

    def remove_item(self, session_id: str | None, product_id: str, color: str) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_session(session_id) if session_id else None
        if not cart:
            return self._view([])

        line = self.repo.get_cart_item(cart.cart_id, product_id, color)
        if line:
            with self._write("remove"):
                self.repo.delete_cart_item(line)
                self._touch(cart)
            logger.info(f"Cart {cart.cart_id}: removed product {product_id}/{color}")

        return self._view(self.repo.get_cart_items(cart.cart_id))

    def clear(self, session_id: str | None) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_session(session_id) if session_id else None
        if not cart:
            return self._view([])

        with self._write("clear"):
            removed = self.repo.delete_cart_items(cart.cart_id)
            self._touch(cart)

        logger.info(f"Cart {cart.cart_id} cleared ({removed} lines)")
        return self._view([])

    # helpers

    @staticmethod
    def _clamp(desired: int, existing: int, stock: int) -> tuple[int, Dict[str, Any]]:
        if desired <= stock:
            return desired, {}

        stock = max(stock, 0)
        if existing >= stock:
            # nic juz nie dolozymy; jesli stan spadl ponizej linii, linia schodzi do stanu
            return stock, {"warning": LIMIT_REACHED, "max": stock, "existing": existing, "added": 0}

        return stock, {
            "warning": ADJUSTED,
            "adjusted": True,
            "max": stock,
            "existing": existing,
            "added": stock - existing,
        }

    def _apply(self, line: CartItemModel, target: int) -> None:
        if target <= 0:
            self.repo.delete_cart_item(line)
        elif target != line.quantity:
            line.quantity = target
            line.updated_at = datetime.now(timezone.utc)

    def _get_or_create_cart(self, session_id: str) -> CartModel:
        cart = self.repo.get_cart_by_session(session_id)
        if cart:
            return cart

        created = self.repo.create_cart(CartModel(session_id=session_id))
        logger.info(f"Created cart {created.cart_id} for session")
        return created

    @staticmethod
    def _touch(cart: CartModel) -> None:
        now = datetime.now(timezone.utc)
        cart.updated_at = now
        cart.last_active = now

    @staticmethod
    def _require_session(session_id: str | None) -> None:
        if not session_id:
            raise ValidationError("Session token is required")

    @contextmanager
    def _write(self, action: str):
        try:
            yield
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Cart {action} failed: {e}")
            raise InfrastructureError(f"Failed to {action} cart") from e

    @staticmethod
    def _view(items: List[CartItemModel], **outcome) -> Dict[str, Any]:
        stores: Dict[str, Dict[str, Any]] = {}
        for item in items:
            group = stores.setdefault(
                item.store_id,
                {"store_id": item.store_id, "store_name": item.store_name, "items": [], "subtotal": Decimal("0.00")},
            )
            group["items"].append(item)
            group["subtotal"] += item.price * item.quantity

        return {
            "success": True,
            "items": items,
            "stores": list(stores.values()),
            "subtotal": shipping.subtotal(items),
            **outcome,
        }
