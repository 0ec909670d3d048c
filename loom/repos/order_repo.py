# loom/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from loom.data.models.order import OrderArtisanModel, OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_orders_by_user(self, user_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )

    def get_orders_by_artisan(self, artisan_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .join(OrderArtisanModel, OrderArtisanModel.order_id == OrderModel.id)
                .where(OrderArtisanModel.artisan_id == artisan_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars()
        )
