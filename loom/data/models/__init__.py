#every model imported here so Base.metadata knows all tables before create_all

from loom.data.models.user import UserModel
from loom.data.models.product import ProductModel
from loom.data.models.cart_item import CartItemModel
from loom.data.models.order import OrderModel, OrderArtisanModel
from loom.data.models.auction_piece import AuctionPieceModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderArtisanModel",
    "AuctionPieceModel",
]
