# loom/tasks/close_auctions.py
from loom.celery_worker import celery_app
from loom.data.database import SessionLocal
from loom.services.auction_service import AuctionService
from loom.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="loom.tasks.close_auctions.close_expired_auctions_task")
def close_expired_auctions_task():
    logger.info("Close expired auctions task started")

    db = SessionLocal()
    try:
        closed = AuctionService(db).close_expired()
        logger.info(f"Closed auctions: {closed}")
        return closed
    finally:
        db.close()
