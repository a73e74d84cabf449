# freshcart/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from freshcart.data.models.order import OrderModel
from freshcart.data.models.order_item import OrderItemModel


class OrderRepo:
    """
    Zapis zamowienia i pozycji idzie w jednej transakcji:
    add_order / add_items robia tylko flush, commit wola serwis.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_items(self, order: OrderModel, items: List[OrderItemModel]) -> List[OrderItemModel]:
        for position, item in enumerate(items, start=len(order.items)):
            item.position = position
            order.items.append(item)
        self.db.flush()
        return items

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_user_order(self, order_id: str, user_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_latest_order(self, user_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
            .limit(1)
        ).scalar_one_or_none()

    def list_orders(self, user_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def find_by_idempotency_key(self, user_id: str, key: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.user_id == user_id,
                OrderModel.idempotency_key == key,
            )
        ).scalar_one_or_none()

    def update_order_status(self, order_id: str, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order
