# loom/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from loom.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: str) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.added_at, CartItemModel.product_id)
            ).scalars()
        )

    def get_cart_item(self, user_id: str, product_id: str) -> CartItemModel | None:
        return self.db.get(CartItemModel, (user_id, product_id))

    def save_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_cart_item(self, user_id: str, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def clear_cart(self, user_id: str) -> int:
        #one batch statement for the whole cart
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        self.db.commit()
        return result.rowcount
