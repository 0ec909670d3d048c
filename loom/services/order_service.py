# loom/services/order_service.py
import uuid
from typing import Any, Dict, List, Mapping, Sequence

from sqlalchemy.orm import Session

from loom.data.models.order import OrderArtisanModel, OrderModel
from loom.data.models.product import ProductModel
from loom.domain.errors import (
    FailedPrecondition,
    InvalidArgument,
    NotFound,
    OutOfRange,
    PermissionDenied,
)
from loom.repos.cart_repo import CartRepo
from loom.repos.order_repo import OrderRepo
from loom.repos.transaction import Transaction, run_transaction
from loom.utils.logging import get_logger

logger = get_logger(__name__)

_ITEM_FIELDS = ("product_id", "quantity", "price", "name", "image_url", "artisan_id")


def group_by_artisan(items: Sequence[Mapping[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Splits order items per artisan, keeping first-seen artisan and item order."""
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for item in items:
        grouped.setdefault(item["artisan_id"], []).append(dict(item))
    return grouped


def checkout(
    tx: Transaction,
    user_id: str,
    items: Sequence[Mapping[str, Any]],
    shipping_info: Mapping[str, Any],
    total: int,
) -> str:
    """
    The invariant-critical part of createOrder, run inside one transaction.

    Every product is re-read through the transaction (never the cart's
    cached values); a single short item aborts the whole order so no stock
    is touched. Returns the new order id.
    """
    for item in items:
        product = tx.get(ProductModel, item["product_id"])
        if product is None:
            raise NotFound(
                f"Product {item['name']} is no longer available",
                context={"productId": item["product_id"]},
            )
        if product.stock < item["quantity"]:
            raise OutOfRange(
                f"Not enough stock for {product.name}: {product.stock} left",
                context={
                    "productId": product.id,
                    "available": product.stock,
                    "requested": item["quantity"],
                },
            )
        tx.update(ProductModel, product.id, stock=product.stock - item["quantity"])

    order_items = [{k: item[k] for k in _ITEM_FIELDS} for item in items]
    items_by_artisan = group_by_artisan(order_items)

    order_id = uuid.uuid4().hex
    tx.add(
        OrderModel(
            id=order_id,
            user_id=user_id,
            items=order_items,
            items_by_artisan=items_by_artisan,
            shipping_info=dict(shipping_info),
            total=total,
            status="Processing",
            artisans=[
                OrderArtisanModel(artisan_id=artisan_id, position=pos)
                for pos, artisan_id in enumerate(items_by_artisan)
            ],
        )
    )
    return order_id


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "items": order.items,
        "items_by_artisan": order.items_by_artisan,
        "artisan_ids": order.artisan_ids,
        "shipping_info": order.shipping_info,
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at,
    }


class OrderService:
    """
    Checkout and order history. Stock consistency lives in checkout();
    the cart is only an input and is cleared afterwards, outside the
    transaction.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)

    def create_order(self, user_id: str, shipping_info: Mapping[str, Any] | None) -> Dict[str, Any]:
        """
        Use case: createOrder.

        1. reads the cart (empty -> FAILED_PRECONDITION)
        2. computes the total
        3. checks and decrements stock, writes the order, in one transaction
        4. clears the cart in a separate batch
        """
        if not shipping_info:
            raise InvalidArgument("Shipping information is required")

        #snapshot to plain dicts, a retried transaction must not depend on expired ORM state
        items = [
            {
                "product_id": i.product_id,
                "quantity": i.quantity,
                "price": i.price,
                "name": i.name,
                "image_url": i.image_url,
                "artisan_id": i.artisan_id,
            }
            for i in self.carts.get_cart_items(user_id)
        ]
        if not items:
            raise FailedPrecondition("Your cart is empty")

        total = sum(i["price"] * i["quantity"] for i in items)

        order_id = run_transaction(
            self.db, lambda tx: checkout(tx, user_id, items, shipping_info, total)
        )
        logger.info(
            f"Order {order_id} created for user {user_id}: {len(items)} items, total {total}"
        )

        # not covered by the transaction, a crash here only leaves a stale cart
        cleared = self.carts.clear_cart(user_id)
        logger.info(f"Cleared {cleared} cart items of user {user_id}")

        return {"order_id": order_id, "total": total}

    def get_order(self, order_id: str, user_id: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found", context={"orderId": order_id})
        if order.user_id != user_id:
            raise PermissionDenied("You do not have access to this order")
        return order_to_dict(order)

    def get_user_orders(self, user_id: str) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.get_orders_by_user(user_id)]

    def get_artisan_orders(self, artisan_id: str) -> List[Dict[str, Any]]:
        """Orders containing the artisan's items, restricted to those items."""
        orders = []
        for order in self.repo.get_orders_by_artisan(artisan_id):
            data = order_to_dict(order)
            mine = order.items_by_artisan.get(artisan_id, [])
            data["items"] = mine
            data["items_by_artisan"] = {artisan_id: mine}
            data["artisan_ids"] = [artisan_id]
            data["total"] = sum(i["price"] * i["quantity"] for i in mine)
            orders.append(data)
        return orders
