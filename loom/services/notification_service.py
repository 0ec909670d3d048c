# loom/services/notification_service.py
import requests

from loom.celery_worker import celery_app
from loom.utils import settings
from loom.utils.logging import get_logger
from loom.utils.retry import http_retry

logger = get_logger(__name__)


class NotificationService:
    """
    Sends customer notifications.
    Work is handed to Celery so the request never waits on the email API.
    """

    @staticmethod
    def send_order_confirmation(to_email: str, order_id: str, total: int):
        send_order_confirmation_task.delay(to_email, order_id, total)


def format_amount(minor_units: int) -> str:
    return f"₹{minor_units // 100:,}.{minor_units % 100:02d}"


@http_retry()
def _post_email(payload: dict):
    resp = requests.post(
        settings.SENDGRID_API_URL,
        json=payload,
        headers={"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"},
        timeout=5,
    )
    resp.raise_for_status()
    return resp


@celery_app.task(name="loom.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(to_email: str, order_id: str, total: int):
    if not settings.SENDGRID_API_KEY:
        logger.info(f"[NOTIFICATION] SendGrid not configured, skipping email for order {order_id}")
        return {"order_id": order_id, "status": "skipped"}

    payload = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": {"email": settings.SENDGRID_FROM_EMAIL},
        "subject": f"Your order {order_id} is being processed",
        "content": [
            {
                "type": "text/plain",
                "value": f"Thank you for your order {order_id} ({format_amount(total)}).",
            }
        ],
    }
    _post_email(payload)
    logger.info(f"[NOTIFICATION] Order {order_id} confirmation sent to {to_email}")
    return {"order_id": order_id, "status": "sent"}
