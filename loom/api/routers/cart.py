# loom/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loom.api.deps import get_current_user_id
from loom.data.database import get_db
from loom.domain.schemas import CartOut, SuccessOut, UpdateCartIn
from loom.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return CartService(db).get_cart(user_id)


@router.post("", response_model=SuccessOut)
def update_cart(
    payload: UpdateCartIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Sets the quantity of a product in the caller's cart (0 removes it)."""
    return CartService(db).update_cart(user_id, payload.product_id, payload.quantity)
