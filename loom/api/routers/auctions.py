# loom/api/routers/auctions.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loom.api.deps import get_current_user, get_current_user_id
from loom.data.database import get_db
from loom.data.models.user import UserModel
from loom.domain.schemas import (
    AuctionPieceCreate,
    AuctionPieceCreatedOut,
    AuctionPieceListOut,
    AuctionPieceOut,
    BidOut,
    PlaceBidIn,
)
from loom.services.auction_service import AuctionService

router = APIRouter(prefix="/auctions", tags=["auctions"])


@router.get("", response_model=AuctionPieceListOut)
def list_auction_pieces(db: Session = Depends(get_db)):
    return {"pieces": AuctionService(db).list_public_pieces()}


@router.post("", response_model=AuctionPieceCreatedOut, status_code=201)
def submit_auction_piece(
    payload: AuctionPieceCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AuctionService(db).submit_piece(user, payload)


@router.get("/{auction_piece_id}", response_model=AuctionPieceOut)
def get_auction_piece(auction_piece_id: str, db: Session = Depends(get_db)):
    return AuctionService(db).get_piece(auction_piece_id)


@router.post("/{auction_piece_id}/bids", response_model=BidOut)
def place_bid(
    auction_piece_id: str,
    payload: PlaceBidIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return AuctionService(db).place_bid(user_id, auction_piece_id, payload.bid_amount)
