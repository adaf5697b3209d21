# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_for_update(self, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.order_id == order_id).with_for_update()
        ).scalar_one_or_none()

    def get_session_order(self, session_id: str, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.session_id == session_id,
                OrderModel.order_id == order_id,
            )
        ).scalar_one_or_none()

    def get_by_order_number(self, session_id: str, order_number: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.session_id == session_id,
                OrderModel.order_number == order_number,
            )
        ).scalar_one_or_none()

    def list_orders(self, session_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.session_id == session_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )

    def commit(self):
        self.db.commit()

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order
