# storefront/tasks/order_followup.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.domain.errors import InfrastructureError, NotFoundError
from storefront.services.inventory_service import InventoryService
from storefront.services.order_service import OrderService
from storefront.utils.logging import get_logger
from storefront.utils.retry import db_retry

logger = get_logger(__name__)


@db_retry()
def _debit(order_id: str):
    db = SessionLocal()
    try:
        return InventoryService(db).debit_for_order(order_id)
    except InfrastructureError as e:
        # tenacity ponawia tylko OperationalError
        raise e.__cause__ or e
    finally:
        db.close()


@db_retry()
def _clear(order_id: str):
    db = SessionLocal()
    try:
        return OrderService(db).clear_cart_for_order(order_id)
    except InfrastructureError as e:
        raise e.__cause__ or e
    finally:
        db.close()


@celery_app.task(
    name="storefront.tasks.order_followup.debit_order_inventory_task",
    bind=True,
    max_retries=5,
    default_retry_delay=30,
)
def debit_order_inventory_task(self, order_id: str):
    logger.info(f"Retrying inventory debit for order {order_id}")
    try:
        updated = _debit(order_id)
    except NotFoundError as e:
        logger.warning(f"Inventory debit retry dropped: {e}")
        return {"order_id": order_id, "updated_variants": 0}
    except Exception as e:
        logger.error(f"Inventory debit retry for order {order_id} failed: {e}")
        raise self.retry(exc=e)

    return {"order_id": order_id, "updated_variants": len(updated)}


@celery_app.task(
    name="storefront.tasks.order_followup.clear_order_cart_task",
    bind=True,
    max_retries=5,
    default_retry_delay=30,
)
def clear_order_cart_task(self, order_id: str):
    logger.info(f"Retrying cart clear for order {order_id}")
    try:
        cleared = _clear(order_id)
    except NotFoundError as e:
        logger.warning(f"Cart clear retry dropped: {e}")
        return {"order_id": order_id, "cleared": False}
    except Exception as e:
        logger.error(f"Cart clear retry for order {order_id} failed: {e}")
        raise self.retry(exc=e)

    return {"order_id": order_id, "cleared": cleared}
