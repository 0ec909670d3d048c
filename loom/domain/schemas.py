# loom/domain/schemas.py
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase, Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessOut(CamelModel):
    success: bool = True


# ---------- cart ----------
class UpdateCartIn(CamelModel):
    """Sets the quantity of one product in the caller's cart, 0 removes it."""

    product_id: str = Field(..., min_length=1, description="Product id")
    quantity: int = Field(..., ge=0, description="New quantity (0 removes the item)")


class CartItemOut(CamelModel):
    product_id: str
    quantity: int
    price: int
    name: str
    image_url: Optional[str] = None
    artisan_id: str
    added_at: datetime


class CartOut(CamelModel):
    cart: List[CartItemOut]
    total: int


# ---------- orders ----------
class CreateOrderIn(CamelModel):
    shipping_info: Optional[Dict[str, Any]] = Field(
        None, description="Free-form shipping details, only checked for presence"
    )


class OrderCreatedOut(CamelModel):
    order_id: str


class OrderItemOut(CamelModel):
    product_id: str
    quantity: int
    price: int
    name: str
    image_url: Optional[str] = None
    artisan_id: str


class OrderOut(CamelModel):
    id: str
    user_id: str
    items: List[OrderItemOut]
    items_by_artisan: Dict[str, List[OrderItemOut]]
    artisan_ids: List[str]
    shipping_info: Dict[str, Any]
    total: int
    status: str
    created_at: datetime


class OrderListOut(CamelModel):
    orders: List[OrderOut]


# ---------- products ----------
class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: int = Field(..., gt=0, description="Price in minor currency units")
    category: str = Field(..., min_length=1)
    stock: int = Field(..., gt=0)
    image_url: str = Field(..., min_length=1)
    region: Optional[str] = None
    materials: List[str] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    """Partial edit; fields left out keep their stored value."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[int] = Field(None, gt=0, description="Price in minor currency units")
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    region: Optional[str] = None
    materials: Optional[List[str]] = None
    image_url: Optional[str] = Field(None, min_length=1)


class ProductCreatedOut(CamelModel):
    success: bool = True
    product_id: str


class ProductOut(CamelModel):
    id: str
    name: str
    description: str
    price: int
    stock: int
    category: str
    region: Optional[str] = None
    materials: List[str]
    image_url: Optional[str] = None
    artisan_id: str
    artisan_name: Optional[str] = None
    is_featured: bool
    created_at: datetime


class ProductListOut(CamelModel):
    products: List[ProductOut]


# ---------- auctions ----------
class AuctionPieceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    category: Optional[str] = None
    region: Optional[str] = None
    materials: List[str] = Field(default_factory=list)
    dimensions: Optional[str] = None
    year_created: Optional[str] = None
    duration_hours: Optional[int] = Field(None, gt=0)


class AuctionPieceCreatedOut(CamelModel):
    success: bool = True
    auction_piece_id: str


class AuctionPieceOut(CamelModel):
    id: str
    artisan_id: str
    artisan_name: Optional[str] = None
    name: str
    description: str
    image_url: Optional[str] = None
    category: Optional[str] = None
    region: Optional[str] = None
    materials: List[str]
    dimensions: Optional[str] = None
    year_created: Optional[str] = None
    duration_hours: Optional[int] = None
    status: str
    reserve_price: Optional[int] = None
    end_time: Optional[datetime] = None
    current_highest_bid: Optional[int] = None
    current_highest_bidder_id: Optional[str] = None
    winning_bid_amount: Optional[int] = None
    winning_bidder_id: Optional[str] = None
    closed_at: Optional[datetime] = None
    created_at: datetime


class AuctionPieceListOut(CamelModel):
    pieces: List[AuctionPieceOut]


class PlaceBidIn(CamelModel):
    bid_amount: int = Field(..., gt=0, description="Bid in minor currency units")


class BidOut(CamelModel):
    success: bool = True
    current_highest_bid: int


# ---------- users ----------
class UserCreate(CamelModel):
    display_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=254)
    role: Literal["customer", "artisan"] = "customer"


class UserRead(CamelModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    role: str
