# loom/services/auction_service.py
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from loom.data.database import utc_now
from loom.data.models.auction_piece import (
    AuctionPieceModel,
    BIDDABLE_STATUSES,
    PUBLIC_STATUSES,
    STATUS_PENDING_VALUATION,
    STATUS_SOLD,
    STATUS_UNSOLD,
)
from loom.data.models.user import ROLE_ARTISAN, UserModel
from loom.domain.errors import (
    FailedPrecondition,
    InvalidArgument,
    NotFound,
    OutOfRange,
    PermissionDenied,
)
from loom.domain.schemas import AuctionPieceCreate
from loom.repos.auction_repo import AuctionRepo
from loom.repos.transaction import Transaction, run_transaction
from loom.utils.logging import get_logger

logger = get_logger(__name__)

# without a reserve any positive bid opens the auction
MIN_OPENING_BID = 1


def apply_bid(
    tx: Transaction,
    piece_id: str,
    bidder_id: str,
    bid_amount: int,
    now: datetime,
) -> int:
    """
    Validates a bid against the piece's current state and records it as
    the highest bid, inside one transaction. Returns the new highest bid.
    """
    piece = tx.get(AuctionPieceModel, piece_id)
    if piece is None:
        raise NotFound("Auction piece not found", context={"auctionPieceId": piece_id})

    if piece.artisan_id == bidder_id:
        raise PermissionDenied("You cannot bid on your own piece")

    if piece.status not in BIDDABLE_STATUSES:
        raise FailedPrecondition(
            "This auction is not open for bidding",
            context={"auctionPieceId": piece_id, "status": piece.status},
        )
    if piece.end_time is None or now >= piece.end_time:
        raise FailedPrecondition(
            "This auction has ended", context={"auctionPieceId": piece_id}
        )

    current = piece.current_highest_bid
    if current is None:
        minimum = piece.reserve_price if piece.reserve_price is not None else MIN_OPENING_BID
        if bid_amount < minimum:
            raise OutOfRange(
                f"The opening bid must be at least {minimum}",
                context={"auctionPieceId": piece_id, "minimumBid": minimum},
            )
    elif bid_amount <= current:
        raise OutOfRange(
            f"Your bid must be higher than the current highest bid of {current}",
            context={"auctionPieceId": piece_id, "currentHighestBid": current},
        )

    tx.update(
        AuctionPieceModel,
        piece_id,
        current_highest_bid=bid_amount,
        current_highest_bidder_id=bidder_id,
    )
    return bid_amount


def close_piece(tx: Transaction, piece_id: str, now: datetime) -> str | None:
    """
    Freezes the result of one expired auction. Returns the final status, or
    None when the piece is no longer open or has not expired yet.
    """
    piece = tx.get(AuctionPieceModel, piece_id)
    if piece is None or piece.status not in BIDDABLE_STATUSES:
        return None
    if piece.end_time is None or now < piece.end_time:
        return None

    bid = piece.current_highest_bid
    reserve = piece.reserve_price if piece.reserve_price is not None else MIN_OPENING_BID
    if bid is not None and bid >= reserve:
        tx.update(
            AuctionPieceModel,
            piece_id,
            status=STATUS_SOLD,
            winning_bid_amount=bid,
            winning_bidder_id=piece.current_highest_bidder_id,
            closed_at=now,
        )
        return STATUS_SOLD

    tx.update(AuctionPieceModel, piece_id, status=STATUS_UNSOLD, closed_at=now)
    return STATUS_UNSOLD


def piece_to_dict(piece: AuctionPieceModel) -> Dict[str, Any]:
    return {
        column.name: getattr(piece, column.name)
        for column in AuctionPieceModel.__table__.columns
        if column.name != "version"
    }


class AuctionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AuctionRepo(db)

    def submit_piece(self, user: UserModel, payload: AuctionPieceCreate) -> Dict[str, Any]:
        if user.role != ROLE_ARTISAN:
            raise PermissionDenied("You must be an artisan to submit an auction piece")

        piece = self.repo.create_piece(
            AuctionPieceModel(
                artisan_id=user.id,
                artisan_name=user.display_name or user.email,
                name=payload.name,
                description=payload.description,
                image_url=payload.image_url,
                category=payload.category.lower() if payload.category else None,
                region=payload.region.lower() if payload.region else None,
                materials=[m.strip() for m in payload.materials if m.strip()],
                dimensions=payload.dimensions,
                year_created=payload.year_created,
                duration_hours=payload.duration_hours,
                status=STATUS_PENDING_VALUATION,
            )
        )
        logger.info(f"Auction piece {piece.id} submitted by artisan {user.id}")
        return {"success": True, "auction_piece_id": piece.id}

    def get_piece(self, piece_id: str) -> Dict[str, Any]:
        piece = self.repo.get_piece(piece_id)
        if not piece:
            raise NotFound("Auction piece not found", context={"auctionPieceId": piece_id})
        return piece_to_dict(piece)

    def list_public_pieces(self) -> List[Dict[str, Any]]:
        return [piece_to_dict(p) for p in self.repo.list_pieces(PUBLIC_STATUSES)]

    def place_bid(self, bidder_id: str, piece_id: str, bid_amount: int) -> Dict[str, Any]:
        """Use case: placeBid."""
        if isinstance(bid_amount, bool) or not isinstance(bid_amount, int) or bid_amount <= 0:
            raise InvalidArgument(
                "Bid amount must be a positive whole number", context={"bidAmount": bid_amount}
            )

        highest = run_transaction(
            self.db, lambda tx: apply_bid(tx, piece_id, bidder_id, bid_amount, utc_now())
        )
        logger.info(f"Bid {highest} by {bidder_id} accepted on auction piece {piece_id}")
        return {"success": True, "current_highest_bid": highest}

    def close_expired(self, now: datetime | None = None) -> Dict[str, int]:
        """Closes every open auction whose end time has passed, one transaction each."""
        now = now or utc_now()
        closed = {STATUS_SOLD: 0, STATUS_UNSOLD: 0}
        for piece_id in self.repo.get_expired_open_piece_ids(now):
            status = run_transaction(self.db, lambda tx: close_piece(tx, piece_id, now))
            if status:
                closed[status] += 1
                logger.info(f"Auction piece {piece_id} closed as {status}")
        return closed
