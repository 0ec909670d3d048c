# loom/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loom.api.deps import get_current_user_id, get_notification_service
from loom.data.database import get_db
from loom.domain.schemas import CreateOrderIn, OrderCreatedOut, OrderListOut, OrderOut
from loom.repos.user_repo import UserRepo
from loom.services.notification_service import NotificationService
from loom.services.order_service import OrderService
from loom.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreatedOut, status_code=201)
def create_order(
    payload: CreateOrderIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Places an order from the caller's cart.
    The confirmation email is queued after the order is committed; a
    failure to queue it is logged and the placed order is still returned.
    """
    result = OrderService(db).create_order(user_id, payload.shipping_info)

    profile = UserRepo(db).get_user(user_id)
    if profile and profile.email:
        try:
            notifier.send_order_confirmation(profile.email, result["order_id"], result["total"])
        except Exception:
            logger.exception(f"Could not queue confirmation for order {result['order_id']}")

    return result


@router.get("", response_model=OrderListOut)
def get_my_orders(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"orders": OrderService(db).get_user_orders(user_id)}


@router.get("/artisan", response_model=OrderListOut)
def get_artisan_orders(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Orders containing the caller's items, showing only those items."""
    return {"orders": OrderService(db).get_artisan_orders(user_id)}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return OrderService(db).get_order(order_id, user_id)
