# storefront/services/inventory_service.py
from collections import OrderedDict
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import InfrastructureError, NotFoundError
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    """
    Ksiegowanie stanow magazynowych per (produkt, kolor).

    Koszyk tylko czyta current_stock, jedynym miejscem ktore zmniejsza
    inventory jest debit przy skladaniu zamowienia.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)
        self.orders = OrderRepo(db)

    #query
    def current_stock(self, product_id: str, color: str) -> int:
        variant = self.repo.get_variant(product_id, color)
        if not variant:
            raise NotFoundError(f"Product {product_id} has no color variant {color}")
        return variant.inventory

    #commands
    def debit(self, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Zdejmuje ilosci z wariantow: new = max(0, stock - quantity).

        Brak towaru nie odrzuca zamowienia (jest juz przyjete), tylko
        loguje warning i przycina do zera. Po debit przelicza total_inventory
        produktu. Nie commituje, robi to wywolujacy.
        """
        per_product: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
        for item in items:
            per_product.setdefault(item["product_id"], []).append(item)

        updated = []
        for product_id, lines in per_product.items():
            product = self.repo.get_product_for_update(product_id)
            if not product:
                logger.warning(f"Debit skipped, product {product_id} no longer exists")
                continue

            variants = {v.color: v for v in product.variants}
            for line in lines:
                color = line["selected_color"]
                quantity = int(line["quantity"])
                variant = variants.get(color)

                if variant is None:
                    logger.warning(f"Debit skipped, product {product_id} has no variant {color}")
                    continue

                remaining = variant.inventory - quantity
                if remaining < 0:
                    logger.warning(
                        f"Inventory shortfall for product {product_id} color {color}: "
                        f"stock {variant.inventory}, ordered {quantity}, clamping to 0"
                    )
                    remaining = 0

                variant.inventory = remaining
                updated.append({"product_id": product_id, "color": color, "inventory": remaining})

            product.total_inventory = sum(v.inventory for v in product.variants)
            logger.info(f"Product {product_id} total inventory now {product.total_inventory}")

        self.db.flush()
        return updated

    def debit_for_order(self, order_id: str) -> List[Dict[str, Any]]:
        """
        Debit zamowienia dokladnie raz: flaga inventory_debited jest zapisywana
        w tej samej transakcji co zmiany stanow, wiec ponowienie jest no-op.
        """
        try:
            order = self.orders.get_order_for_update(order_id)
            if not order:
                raise NotFoundError(f"Order {order_id} not found")

            if order.inventory_debited:
                logger.info(f"Order {order_id} already debited, skipping")
                self.db.rollback()
                return []

            updated = self.debit(order.items)
            order.inventory_debited = True
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Inventory debit for order {order_id} failed: {e}")
            raise InfrastructureError("Failed to debit inventory") from e

        logger.info(f"Inventory debited for order {order.order_number}: {len(updated)} variants")
        return updated
