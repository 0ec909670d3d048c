# loom/celery_worker.py
from celery import Celery

from loom.utils import settings

celery_app = Celery(
    "loom",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

# tasks have to be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "loom.tasks.close_auctions",
    "loom.services.notification_service",
)

# closing cadence is deployment policy, only scheduled when configured
if settings.AUCTION_CLOSE_INTERVAL_SECONDS:
    celery_app.conf.beat_schedule = {
        "close-expired-auctions": {
            "task": "loom.tasks.close_auctions.close_expired_auctions_task",
            "schedule": settings.AUCTION_CLOSE_INTERVAL_SECONDS,
        },
    }

celery_app.conf.timezone = "UTC"
