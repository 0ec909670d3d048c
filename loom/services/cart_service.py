from typing import Any, Dict

from sqlalchemy.orm import Session

from loom.data.database import utc_now
from loom.data.models.cart_item import CartItemModel
from loom.domain.errors import InvalidArgument, NotFound, OutOfRange
from loom.repos.cart_repo import CartRepo
from loom.repos.product_repo import ProductRepo
from loom.utils.logging import get_logger

logger = get_logger(__name__)


def cart_item_to_dict(item: CartItemModel) -> Dict[str, Any]:
    return {
        "product_id": item.product_id,
        "quantity": item.quantity,
        "price": item.price,
        "name": item.name,
        "image_url": item.image_url,
        "artisan_id": item.artisan_id,
        "added_at": item.added_at,
    }


class CartService:
    """
    The cart is advisory display state: prices and names are snapshots and
    stock is only checked here as a courtesy, checkout re-checks everything
    inside its transaction.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        items = [cart_item_to_dict(i) for i in self.repo.get_cart_items(user_id)]
        total = sum(i["price"] * i["quantity"] for i in items)
        return {"cart": items, "total": total}

    #commands
    def update_cart(self, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        if not product_id:
            raise InvalidArgument("productId is required")
        if quantity < 0:
            raise InvalidArgument(
                "Quantity cannot be negative", context={"quantity": quantity}
            )

        if quantity == 0:
            removed = self.repo.delete_cart_item(user_id, product_id)
            if removed:
                logger.info(f"Removed product {product_id} from cart of user {user_id}")
            return {"success": True}

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found", context={"productId": product_id})

        if quantity > product.stock:
            raise OutOfRange(
                f"Only {product.stock} of {product.name} left in stock",
                context={
                    "productId": product_id,
                    "available": product.stock,
                    "requested": quantity,
                },
            )

        item = self.repo.get_cart_item(user_id, product_id)
        if item:
            logger.info(
                f"Cart of user {user_id}: product {product_id} quantity "
                f"{item.quantity} -> {quantity}"
            )
            item.quantity = quantity
        else:
            logger.info(f"Cart of user {user_id}: adding product {product_id} x{quantity}")
            item = CartItemModel(
                user_id=user_id,
                product_id=product_id,
                quantity=quantity,
                added_at=utc_now(),
            )

        # refresh the display snapshot on every write
        item.price = product.price
        item.name = product.name
        item.image_url = product.image_url
        item.artisan_id = product.artisan_id

        self.repo.save_cart_item(item)
        return {"success": True}
