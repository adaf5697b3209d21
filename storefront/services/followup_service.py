# storefront/services/followup_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEBIT_TASK = "storefront.tasks.order_followup.debit_order_inventory_task"
CLEAR_CART_TASK = "storefront.tasks.order_followup.clear_order_cart_task"


class FollowUpService:
    """
    Ponawianie krokow 4/5 finalizacji zamowienia w tle (Celery).
    Zadania wysylane po nazwie, bez importu modulu z taskami.
    """

    @staticmethod
    def retry_inventory_debit(order_id: str):
        logger.info(f"Scheduling inventory debit retry for order {order_id}")
        celery_app.send_task(DEBIT_TASK, args=[order_id])

    @staticmethod
    def retry_cart_clear(order_id: str):
        logger.info(f"Scheduling cart clear retry for order {order_id}")
        celery_app.send_task(CLEAR_CART_TASK, args=[order_id])
